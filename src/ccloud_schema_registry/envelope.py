"""ワイヤーエンベロープ（マジックバイト + スキーマ ID + ペイロード）"""

from __future__ import annotations

import struct

from .exceptions import SchemaRegistryErrorCodes, SerializationError

MAGIC_BYTE = 0
_HEADER = struct.Struct(">BI")
HEADER_SIZE = _HEADER.size


def pack(schema_id: int, payload: bytes) -> bytes:
    """スキーマ ID とエンコード済みペイロードをエンベロープに包む。"""
    if not 0 <= schema_id <= 0xFFFFFFFF:
        raise SerializationError(
            f"Schema id out of range: {schema_id}",
            code=SchemaRegistryErrorCodes.INVALID_ENVELOPE,
        )
    return _HEADER.pack(MAGIC_BYTE, schema_id) + payload


def unpack(data: bytes) -> tuple[int, bytes]:
    """エンベロープを (スキーマ ID, ペイロード) に分解する。"""
    if len(data) < HEADER_SIZE:
        raise SerializationError(
            f"Message too short for wire envelope: {len(data)} bytes",
            code=SchemaRegistryErrorCodes.INVALID_ENVELOPE,
        )
    magic, schema_id = _HEADER.unpack_from(data)
    if magic != MAGIC_BYTE:
        raise SerializationError(
            f"Unknown magic byte: {magic}",
            code=SchemaRegistryErrorCodes.INVALID_ENVELOPE,
        )
    return schema_id, bytes(data[HEADER_SIZE:])
