"""Schema Registry HTTP クライアント実装"""

from __future__ import annotations

import json
import logging
import time
from typing import Any
from urllib.parse import quote

import httpx

from .cache import LockedCache
from .client import SchemaRegistryClient
from .codec import AvroCodec, compile_schema
from .exceptions import (
    NotFoundError,
    RegistryError,
    SchemaRegistryErrorCodes,
    SerializationError,
    TransportError,
)
from .models import (
    CONTENT_TYPE,
    DEFAULT_TIMEOUT_SECONDS,
    BasicCredentials,
    SchemaRegistryConfig,
)

logger = logging.getLogger(__name__)

_SCHEMA_BY_ID = "/schemas/ids/{schema_id}"
_SUBJECT_VERSIONS = "/subjects/{subject}/versions"
_UNRECOGNIZED_ERROR = "Unrecognized error found"


class HttpSchemaRegistryClient(SchemaRegistryClient):
    """httpx を使ったキャッシュ付き Schema Registry HTTP クライアント。

    キャッシュはデフォルトで無効。認証情報とキャッシュは生成後に設定する。
    設定変更はトラフィック開始前に済ませること（リクエスト処理中の変更は未定義）。

    サブジェクトキャッシュは登録時点の最新 ID を保持し続ける。レジストリ側で
    サブジェクトの最新バージョンが変わっても追従しない。
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._url = url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._credentials: BasicCredentials | None = None
        self._caching_enabled = False
        self._schema_cache: LockedCache[int, AvroCodec] = LockedCache()
        self._subject_cache: LockedCache[str, int] = LockedCache()
        self._http = httpx.Client(
            base_url=self._url,
            headers={"Content-Type": CONTENT_TYPE},
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: SchemaRegistryConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> HttpSchemaRegistryClient:
        """SchemaRegistryConfig から設定済みのクライアントを生成する。"""
        client = cls(config.url, timeout_seconds=config.timeout_seconds, transport=transport)
        credentials = config.credentials()
        if credentials is not None:
            client.set_credentials(credentials.username, credentials.password)
        client.enable_caching(config.caching_enabled)
        return client

    @property
    def url(self) -> str:
        return self._url

    @property
    def caching_enabled(self) -> bool:
        return self._caching_enabled

    def set_credentials(self, username: str, password: str) -> None:
        """Basic 認証情報を設定する。username が空なら認証なしに戻す。"""
        self._credentials = BasicCredentials(username, password) if username else None

    def enable_caching(self, enabled: bool = True) -> None:
        """キャッシュの有効/無効を切り替える。既存エントリは破棄しない。"""
        self._caching_enabled = enabled

    def get_schema(self, schema_id: int) -> AvroCodec:
        """ID でスキーマを取得してコンパイル済みコーデックを返す。

        Raises:
            NotFoundError: ID が存在しない場合
            RegistryError: レジストリが 2xx 以外を返した場合
            TransportError: 接続失敗・タイムアウトの場合
            SerializationError: 応答ボディを解釈できない場合
            CompileError: スキーマテキストが不正な場合
        """
        caching = self._caching_enabled
        if caching:
            cached = self._schema_cache.get(schema_id)
            if cached is not None:
                logger.debug("Schema cache hit", extra={"schema_id": schema_id})
                return cached

        context = f"get_schema({schema_id})"
        content = self._request("GET", _SCHEMA_BY_ID.format(schema_id=schema_id), context)
        schema = _parse_field(content, "schema", context)
        if not isinstance(schema, str):
            raise SerializationError(f"{context}: 'schema' is not a string")
        codec = compile_schema(schema)

        if caching:
            codec = self._schema_cache.put(schema_id, codec)
        return codec

    def create_subject(self, subject: str, schema: str) -> int:
        """サブジェクトにスキーマを登録してスキーマ ID を返す。

        キャッシュ有効時、同じサブジェクトの 2 回目以降はスキーマテキストに
        かかわらずキャッシュ済みの ID を返す。

        Raises:
            get_schema と同じ
        """
        caching = self._caching_enabled
        if caching:
            cached = self._subject_cache.get(subject)
            if cached is not None:
                logger.debug("Subject cache hit", extra={"subject": subject})
                return cached

        context = f"create_subject({subject})"
        path = _SUBJECT_VERSIONS.format(subject=quote(subject, safe=""))
        content = self._request("POST", path, context, body={"schema": schema})
        schema_id = _parse_field(content, "id", context)
        if not isinstance(schema_id, int) or isinstance(schema_id, bool):
            raise SerializationError(f"{context}: 'id' is not an integer")

        if caching:
            schema_id = self._subject_cache.put(subject, schema_id)
        return schema_id

    def close(self) -> None:
        """HTTP コネクションプールを閉じる。"""
        self._http.close()

    def _request(
        self,
        method: str,
        path: str,
        context: str,
        body: dict[str, Any] | None = None,
    ) -> bytes:
        """リクエストを送りボディを返す。

        httpx のタイムアウトは接続・読み取りなどのフェーズごとに効くため、
        ボディを少しずつ返すサーバーには効かない。呼び出し全体の期限を
        受信チャンクごとに確認し、超えたら TIMEOUT にする。
        """
        auth = self._credentials.as_auth() if self._credentials is not None else None
        deadline = time.monotonic() + self._timeout_seconds
        try:
            with self._http.stream(method, path, json=body, auth=auth) as resp:
                chunks: list[bytes] = []
                _check_deadline(deadline, context)
                for chunk in resp.iter_bytes():
                    chunks.append(chunk)
                    _check_deadline(deadline, context)
                status_code, reason = resp.status_code, resp.reason_phrase
        except httpx.TimeoutException as e:
            raise TransportError(
                code=SchemaRegistryErrorCodes.TIMEOUT,
                message=f"{context}: request timed out",
                cause=e,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                code=SchemaRegistryErrorCodes.CONNECTION_ERROR,
                message=f"{context}: {e}",
                cause=e,
            ) from e
        content = b"".join(chunks)
        if not 200 <= status_code < 300:
            raise _registry_error(status_code, reason, content, context)
        return content


def _check_deadline(deadline: float, context: str) -> None:
    if time.monotonic() > deadline:
        raise TransportError(
            code=SchemaRegistryErrorCodes.TIMEOUT,
            message=f"{context}: response not completed before deadline",
        )


def _registry_error(status_code: int, reason: str, content: bytes, context: str) -> RegistryError:
    error_code, message = _parse_error_body(status_code, reason, content)
    logger.warning(
        "Schema Registry request failed",
        extra={
            "context": context,
            "status_code": status_code,
            "error_code": error_code,
        },
    )
    if status_code == 404:
        return NotFoundError(error_code=error_code, message=message)
    return RegistryError(status_code=status_code, error_code=error_code, message=message)


def _parse_error_body(status_code: int, reason: str, content: bytes) -> tuple[int, str]:
    """エラーボディを (error_code, message) に変換する。

    想定形式でなければ HTTP ステータスとリーズンフレーズで代替する。
    """
    try:
        data = json.loads(content)
        return int(data["error_code"]), str(data["message"])
    except (ValueError, KeyError, TypeError):
        return status_code, reason or _UNRECOGNIZED_ERROR


def _parse_field(content: bytes, field: str, context: str) -> Any:  # noqa: ANN401
    try:
        data = json.loads(content)
    except ValueError as e:
        raise SerializationError(f"{context}: response body is not valid JSON", cause=e) from e
    if not isinstance(data, dict) or field not in data:
        raise SerializationError(f"{context}: response has no '{field}' field")
    return data[field]
