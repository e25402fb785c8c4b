"""fastavro ベースの Avro コーデック"""

from __future__ import annotations

import io
import json
from typing import Any

import fastavro
from fastavro.validation import ValidationError, validate

from .exceptions import CompileError, SerializationError


class AvroCodec:
    """スキーマテキストからコンパイルした再利用可能なエンコーダー/デコーダー。

    スレッド間で共有してよい（コンパイル済みスキーマは読み取り専用）。
    """

    def __init__(self, schema: str) -> None:
        self._schema = schema
        try:
            definition = json.loads(schema)
        except ValueError as e:
            raise CompileError(f"Schema is not valid JSON: {e}", cause=e) from e
        try:
            self._parsed: Any = fastavro.parse_schema(definition)
        except Exception as e:
            raise CompileError(f"Invalid Avro schema: {e}", cause=e) from e

    @property
    def schema(self) -> str:
        """コンパイル元のスキーマテキスト。"""
        return self._schema

    @property
    def parsed_schema(self) -> Any:  # noqa: ANN401
        return self._parsed

    @property
    def name(self) -> str:
        """レコード等の名前付き型ならフルネーム、プリミティブなら型名。"""
        if isinstance(self._parsed, dict):
            return str(self._parsed.get("name") or self._parsed.get("type"))
        return str(self._parsed)

    def encode(self, value: Any) -> bytes:  # noqa: ANN401
        """値を schemaless Avro バイナリにエンコードする。"""
        try:
            validate(value, self._parsed, raise_errors=True)
            buf = io.BytesIO()
            fastavro.schemaless_writer(buf, self._parsed, value)
        except (ValidationError, ValueError, TypeError) as e:
            raise SerializationError(
                f"Failed to encode value as {self.name}: {e}", cause=e
            ) from e
        return buf.getvalue()

    def decode(self, data: bytes) -> Any:  # noqa: ANN401
        """schemaless Avro バイナリを値にデコードする。"""
        try:
            return fastavro.schemaless_reader(io.BytesIO(data), self._parsed)
        except Exception as e:
            raise SerializationError(
                f"Failed to decode payload as {self.name}: {e}", cause=e
            ) from e

    def __repr__(self) -> str:
        return f"AvroCodec(name={self.name!r})"


def compile_schema(schema: str) -> AvroCodec:
    """スキーマテキストをコンパイルする。

    Raises:
        CompileError: スキーマが不正な場合
    """
    return AvroCodec(schema)
