"""clients テスト共通フィクスチャ"""

import pytest
from ccloud_clients.models import ClientProperties
from ccloud_schema_registry import AvroCodec, NotFoundError, SchemaRegistryClient, compile_schema


class InMemoryRegistry(SchemaRegistryClient):
    """テスト用インメモリレジストリ。"""

    def __init__(self) -> None:
        self.schemas: dict[int, str] = {}
        self.subjects: dict[str, int] = {}
        self.closed = False

    def get_schema(self, schema_id: int) -> AvroCodec:
        if schema_id not in self.schemas:
            raise NotFoundError(error_code=40403, message="Schema not found")
        return compile_schema(self.schemas[schema_id])

    def create_subject(self, subject: str, schema: str) -> int:
        schema_id = self.subjects.setdefault(subject, len(self.schemas) + 1)
        self.schemas[schema_id] = schema
        return schema_id

    def set_credentials(self, username: str, password: str) -> None:
        pass

    def enable_caching(self, enabled: bool = True) -> None:
        pass

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def registry() -> InMemoryRegistry:
    return InMemoryRegistry()


@pytest.fixture
def properties() -> ClientProperties:
    return ClientProperties.model_validate(
        {
            "bootstrap.servers": "broker:9092",
            "security.protocol": "PLAINTEXT",
            "schema.registry.url": "http://registry:8081",
        }
    )
