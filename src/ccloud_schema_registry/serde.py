"""Schema Registry 連携の Avro シリアライザー/デシリアライザー"""

from __future__ import annotations

from typing import Any

from . import envelope
from .client import SchemaRegistryClient
from .codec import AvroCodec, compile_schema


class AvroSerializer:
    """値を Avro エンコードしてワイヤーエンベロープに包むシリアライザー。

    スキーマ ID は subject への登録結果（create_subject）から得る。
    """

    def __init__(
        self,
        client: SchemaRegistryClient,
        subject: str,
        schema: str | AvroCodec,
    ) -> None:
        if not subject:
            raise ValueError("subject cannot be empty")
        self._client = client
        self._subject = subject
        self._codec = schema if isinstance(schema, AvroCodec) else compile_schema(schema)

    @property
    def subject(self) -> str:
        return self._subject

    @property
    def codec(self) -> AvroCodec:
        return self._codec

    def __call__(self, value: Any) -> bytes:  # noqa: ANN401
        schema_id = self._client.create_subject(self._subject, self._codec.schema)
        return envelope.pack(schema_id, self._codec.encode(value))


class AvroDeserializer:
    """ワイヤーエンベロープのスキーマ ID でコーデックを解決してデコードする。"""

    def __init__(self, client: SchemaRegistryClient) -> None:
        self._client = client

    def __call__(self, data: bytes) -> Any:  # noqa: ANN401
        schema_id, payload = envelope.unpack(data)
        codec = self._client.get_schema(schema_id)
        return codec.decode(payload)
