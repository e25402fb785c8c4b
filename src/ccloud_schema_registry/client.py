"""Schema Registry クライアント抽象基底クラス"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .codec import AvroCodec


class SchemaRegistryClient(ABC):
    """Schema Registry クライアント抽象基底クラス。"""

    @abstractmethod
    def get_schema(self, schema_id: int) -> AvroCodec:
        """ID でスキーマを取得してコンパイル済みコーデックを返す。"""
        ...

    @abstractmethod
    def create_subject(self, subject: str, schema: str) -> int:
        """サブジェクトにスキーマを登録してスキーマ ID を返す。"""
        ...

    @abstractmethod
    def set_credentials(self, username: str, password: str) -> None:
        """以降のリクエストに付与する Basic 認証情報を設定する。"""
        ...

    @abstractmethod
    def enable_caching(self, enabled: bool = True) -> None:
        """キャッシュの有効/無効を切り替える。"""
        ...

    def close(self) -> None:
        """保持しているリソースを解放する。"""

    def __enter__(self) -> SchemaRegistryClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
