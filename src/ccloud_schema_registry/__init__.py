"""ccloud schema_registry library."""

from .cache import LockedCache, ReadWriteLock
from .client import SchemaRegistryClient
from .codec import AvroCodec, compile_schema
from .exceptions import (
    CompileError,
    NotFoundError,
    RegistryError,
    SchemaRegistryError,
    SchemaRegistryErrorCodes,
    SerializationError,
    TransportError,
)
from .http_client import HttpSchemaRegistryClient
from .models import BasicCredentials, SchemaRegistryConfig
from .serde import AvroDeserializer, AvroSerializer

__all__ = [
    "SchemaRegistryClient",
    "HttpSchemaRegistryClient",
    "SchemaRegistryConfig",
    "BasicCredentials",
    "AvroCodec",
    "compile_schema",
    "AvroSerializer",
    "AvroDeserializer",
    "LockedCache",
    "ReadWriteLock",
    "SchemaRegistryError",
    "SchemaRegistryErrorCodes",
    "TransportError",
    "RegistryError",
    "NotFoundError",
    "CompileError",
    "SerializationError",
]
