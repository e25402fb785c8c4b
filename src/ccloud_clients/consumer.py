"""注文イベントコンシューマー"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from confluent_kafka import Consumer
from confluent_kafka import KafkaError as ConfluentKafkaError

from ccloud_schema_registry import AvroDeserializer, SchemaRegistryClient

from .exceptions import KafkaError, KafkaErrorCodes
from .models import ORDERS_TOPIC, ClientProperties

logger = logging.getLogger(__name__)

DEFAULT_GROUP_ID = "python-consumer"


class OrderConsumer:
    """トピックを購読し、レコードをスキーマ ID で解決してデコードするコンシューマー。"""

    def __init__(
        self,
        properties: ClientProperties,
        registry: SchemaRegistryClient,
        topic: str = ORDERS_TOPIC,
        group_id: str = DEFAULT_GROUP_ID,
        auto_offset_reset: str = "latest",
        consumer: Any = None,  # noqa: ANN401
    ) -> None:
        self._properties = properties
        self._topic = topic
        self._group_id = group_id
        self._auto_offset_reset = auto_offset_reset
        self._deserializer = AvroDeserializer(registry)
        self._consumer = consumer
        self._subscribed = False

    def _get_consumer(self) -> Any:  # noqa: ANN401
        if self._consumer is None:
            self._consumer = Consumer(
                self._properties.consumer_config(self._group_id, self._auto_offset_reset)
            )
        if not self._subscribed:
            self._consumer.subscribe([self._topic])
            self._subscribed = True
        return self._consumer

    def poll(self, timeout_seconds: float = 1.0) -> Any:  # noqa: ANN401
        """1 件受信してデコード済みレコードを返す。タイムアウト時は None。"""
        msg = self._get_consumer().poll(timeout=timeout_seconds)
        if msg is None:
            return None
        err = msg.error()
        if err is not None:
            if err.code() == ConfluentKafkaError._PARTITION_EOF:
                return None
            raise KafkaError(
                code=KafkaErrorCodes.RECEIVE_FAILED,
                message=f"Kafka error on {self._topic}: {err}",
            )
        return self._deserializer(msg.value() or b"")

    def run(
        self,
        handler: Callable[[Any], None],
        max_messages: int | None = None,
        stop_event: threading.Event | None = None,
        poll_timeout_seconds: float = 0.1,
    ) -> int:
        """受信したレコードを handler に渡し続け、処理件数を返す。"""
        stop = stop_event or threading.Event()
        handled = 0
        while not stop.is_set() and (max_messages is None or handled < max_messages):
            record = self.poll(poll_timeout_seconds)
            if record is None:
                continue
            handler(record)
            handled += 1
        return handled

    def close(self) -> None:
        """コンシューマーを閉じる。"""
        if self._consumer is not None:
            self._consumer.close()
            self._consumer = None
            self._subscribed = False

    def __enter__(self) -> OrderConsumer:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
