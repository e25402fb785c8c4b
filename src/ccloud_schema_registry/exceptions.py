"""schema_registry ライブラリの例外型定義"""

from __future__ import annotations


class SchemaRegistryError(Exception):
    """schema_registry ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class SchemaRegistryErrorCodes:
    """SchemaRegistryError のエラーコード定数。"""

    SCHEMA_NOT_FOUND: str = "SCHEMA_NOT_FOUND"
    REGISTRY_ERROR: str = "REGISTRY_ERROR"
    CONNECTION_ERROR: str = "CONNECTION_ERROR"
    TIMEOUT: str = "TIMEOUT"
    COMPILE_ERROR: str = "COMPILE_ERROR"
    SERIALIZATION_ERROR: str = "SERIALIZATION_ERROR"
    INVALID_ENVELOPE: str = "INVALID_ENVELOPE"


class TransportError(SchemaRegistryError):
    """Schema Registry に到達できなかった（接続失敗・タイムアウト）エラー。"""


class RegistryError(SchemaRegistryError):
    """Schema Registry がリクエストを拒否した（2xx 以外の応答）エラー。

    error_code / message はレジストリのエラーボディ
    ``{"error_code": ..., "message": ...}`` の値。ボディを解釈できない場合は
    HTTP ステータスコードとリーズンフレーズが入る。

    レジストリの数値エラーコード（例: 40403、ボディなしの 404 なら 404）は
    ``error_code`` で参照する。``code`` は他の例外と共通の文字列カテゴリ
    （``REGISTRY_ERROR`` / ``SCHEMA_NOT_FOUND``）。
    """

    def __init__(
        self,
        status_code: int,
        error_code: int,
        message: str,
        code: str = SchemaRegistryErrorCodes.REGISTRY_ERROR,
    ) -> None:
        super().__init__(code=code, message=f"{error_code} - {message}")
        self.status_code = status_code
        self.error_code = error_code
        self.message = message


class NotFoundError(RegistryError):
    """スキーマ ID またはサブジェクトが存在しない（HTTP 404）エラー。"""

    def __init__(self, error_code: int, message: str) -> None:
        super().__init__(
            status_code=404,
            error_code=error_code,
            message=message,
            code=SchemaRegistryErrorCodes.SCHEMA_NOT_FOUND,
        )


class CompileError(SchemaRegistryError):
    """スキーマテキストを Avro スキーマとしてコンパイルできないエラー。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(SchemaRegistryErrorCodes.COMPILE_ERROR, message, cause)


class SerializationError(SchemaRegistryError):
    """JSON ボディ・Avro ペイロード・ワイヤーエンベロープの変換エラー。"""

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        code: str = SchemaRegistryErrorCodes.SERIALIZATION_ERROR,
    ) -> None:
        super().__init__(code, message, cause)
