"""Schema Registry データモデル"""

from __future__ import annotations

from dataclasses import dataclass

CONTENT_TYPE = "application/vnd.schemaregistry.v1+json"
DEFAULT_TIMEOUT_SECONDS = 2.0


@dataclass(frozen=True)
class BasicCredentials:
    """Basic 認証の資格情報。"""

    username: str
    password: str

    def as_auth(self) -> tuple[str, str]:
        return (self.username, self.password)


@dataclass
class SchemaRegistryConfig:
    """Schema Registry 接続設定。

    username が空の場合は認証なしでリクエストする。
    """

    url: str
    username: str = ""
    password: str = ""
    caching_enabled: bool = False
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def credentials(self) -> BasicCredentials | None:
        if not self.username:
            return None
        return BasicCredentials(self.username, self.password)
