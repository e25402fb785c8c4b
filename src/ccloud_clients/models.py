"""clients 設定・データモデル"""

from __future__ import annotations

import random
import time
import uuid
from dataclasses import dataclass, field
from enum import StrEnum
from importlib import resources
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ccloud_schema_registry import SchemaRegistryConfig

ORDERS_TOPIC = "orders"


class SecurityProtocol(StrEnum):
    """Kafka セキュリティプロトコル。"""

    PLAINTEXT = "PLAINTEXT"
    SSL = "SSL"
    SASL_PLAINTEXT = "SASL_PLAINTEXT"
    SASL_SSL = "SASL_SSL"


class ClientProperties(BaseModel):
    """ccloud.properties の接続設定（キーはプロパティ名のドット区切り）。"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    bootstrap_servers: str = Field(alias="bootstrap.servers", min_length=1)
    security_protocol: SecurityProtocol = Field(
        default=SecurityProtocol.SASL_SSL, alias="security.protocol"
    )
    sasl_mechanism: str = Field(default="PLAIN", alias="sasl.mechanism")
    sasl_username: str = Field(default="", alias="sasl.username")
    sasl_password: str = Field(default="", alias="sasl.password")
    schema_registry_url: str = Field(alias="schema.registry.url", min_length=1)
    schema_registry_username: str = Field(
        default="", alias="schema.registry.basic.auth.username"
    )
    schema_registry_password: str = Field(
        default="", alias="schema.registry.basic.auth.password"
    )

    def to_confluent_config(self) -> dict[str, Any]:
        """confluent-kafka 共通設定辞書に変換する。"""
        config: dict[str, Any] = {
            "bootstrap.servers": self.bootstrap_servers,
            "broker.version.fallback": "0.10.0.0",
            "api.version.fallback.ms": 0,
        }
        if self.security_protocol != SecurityProtocol.PLAINTEXT:
            config["security.protocol"] = self.security_protocol.value
        if self.security_protocol in (SecurityProtocol.SASL_PLAINTEXT, SecurityProtocol.SASL_SSL):
            config["sasl.mechanism"] = self.sasl_mechanism
            config["sasl.username"] = self.sasl_username
            config["sasl.password"] = self.sasl_password
        return config

    def producer_config(self) -> dict[str, Any]:
        return self.to_confluent_config()

    def consumer_config(
        self,
        group_id: str,
        auto_offset_reset: str = "latest",
    ) -> dict[str, Any]:
        """コンシューマー設定辞書に変換する。"""
        config = self.to_confluent_config()
        config.update(
            {
                "group.id": group_id,
                "auto.offset.reset": auto_offset_reset,
                "session.timeout.ms": 6000,
            }
        )
        return config

    def registry_config(self, caching_enabled: bool = True) -> SchemaRegistryConfig:
        """Schema Registry 接続設定に変換する。"""
        return SchemaRegistryConfig(
            url=self.schema_registry_url,
            username=self.schema_registry_username,
            password=self.schema_registry_password,
            caching_enabled=caching_enabled,
        )


@dataclass
class Order:
    """注文レコード。date はエポックからのナノ秒。"""

    id: str = field(default_factory=lambda: str(uuid.uuid1()))
    date: int = field(default_factory=time.time_ns)
    amount: float = field(default_factory=lambda: float(random.randrange(1000)))

    def to_record(self) -> dict[str, Any]:
        return {"id": self.id, "date": self.date, "amount": self.amount}

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Order:
        return cls(id=record["id"], date=record["date"], amount=record["amount"])


def load_order_schema() -> str:
    """パッケージ同梱の orders.avsc を読み込む。"""
    return resources.files("ccloud_clients").joinpath("orders.avsc").read_text(encoding="utf-8")
