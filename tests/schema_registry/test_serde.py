"""AvroSerializer / AvroDeserializer のユニットテスト"""

import json

import pytest
from ccloud_schema_registry import envelope
from ccloud_schema_registry.client import SchemaRegistryClient
from ccloud_schema_registry.codec import AvroCodec, compile_schema
from ccloud_schema_registry.exceptions import NotFoundError, SerializationError
from ccloud_schema_registry.serde import AvroDeserializer, AvroSerializer

SCHEMA = json.dumps(
    {
        "type": "record",
        "name": "Order",
        "fields": [
            {"name": "id", "type": "string"},
            {"name": "amount", "type": "double"},
        ],
    }
)


class InMemoryRegistry(SchemaRegistryClient):
    """テスト用インメモリレジストリ。呼び出しを記録する。"""

    def __init__(self) -> None:
        self.schemas: dict[int, str] = {}
        self.subjects: dict[str, int] = {}
        self.registered: list[tuple[str, str]] = []

    def get_schema(self, schema_id: int) -> AvroCodec:
        if schema_id not in self.schemas:
            raise NotFoundError(error_code=40403, message="Schema not found")
        return compile_schema(self.schemas[schema_id])

    def create_subject(self, subject: str, schema: str) -> int:
        self.registered.append((subject, schema))
        schema_id = self.subjects.setdefault(subject, len(self.schemas) + 1)
        self.schemas[schema_id] = schema
        return schema_id

    def set_credentials(self, username: str, password: str) -> None:
        pass

    def enable_caching(self, enabled: bool = True) -> None:
        pass


def test_serializer_frames_payload_with_registered_id() -> None:
    """登録された ID でエンベロープが作られること。"""
    registry = InMemoryRegistry()
    serialize = AvroSerializer(registry, "orders", SCHEMA)
    data = serialize({"id": "a1", "amount": 9.5})
    schema_id, payload = envelope.unpack(data)
    assert schema_id == registry.subjects["orders"]
    assert registry.registered == [("orders", SCHEMA)]
    assert compile_schema(SCHEMA).decode(payload) == {"id": "a1", "amount": 9.5}


def test_round_trip_through_registry() -> None:
    """シリアライザーの出力をデシリアライザーで元に戻せること。"""
    registry = InMemoryRegistry()
    serialize = AvroSerializer(registry, "orders", compile_schema(SCHEMA))
    deserialize = AvroDeserializer(registry)
    record = {"id": "b2", "amount": 0.25}
    assert deserialize(serialize(record)) == record


def test_serializer_requires_subject() -> None:
    """空のサブジェクトは ValueError。"""
    with pytest.raises(ValueError, match="subject"):
        AvroSerializer(InMemoryRegistry(), "", SCHEMA)


def test_deserializer_unknown_schema_id() -> None:
    """未登録 ID のレコードはレジストリのエラーがそのまま伝播すること。"""
    with pytest.raises(NotFoundError):
        AvroDeserializer(InMemoryRegistry())(envelope.pack(99, b""))


def test_deserializer_rejects_bad_envelope() -> None:
    """エンベロープが不正なら SerializationError。"""
    with pytest.raises(SerializationError):
        AvroDeserializer(InMemoryRegistry())(b"\x07garbage")
