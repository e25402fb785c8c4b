"""注文イベントプロデューサー"""

from __future__ import annotations

import logging
import threading
from typing import Any

from confluent_kafka import KafkaException, Producer

from ccloud_schema_registry import AvroSerializer, SchemaRegistryClient

from .exceptions import KafkaError, KafkaErrorCodes
from .models import ORDERS_TOPIC, ClientProperties, Order, load_order_schema

logger = logging.getLogger(__name__)


class OrderProducer:
    """注文を Avro + ワイヤーエンベロープで Kafka に発行するプロデューサー。

    サブジェクト名はトピック名を使う。Schema Registry のエラーは呼び出し元に
    そのまま伝播する（スキーマなしではレコードを正しく直列化できないため）。
    """

    def __init__(
        self,
        properties: ClientProperties,
        registry: SchemaRegistryClient,
        topic: str = ORDERS_TOPIC,
        schema: str | None = None,
        producer: Any = None,  # noqa: ANN401
        flush_timeout_seconds: float = 10.0,
    ) -> None:
        self._properties = properties
        self._topic = topic
        self._serializer = AvroSerializer(registry, topic, schema or load_order_schema())
        self._producer = producer
        self._flush_timeout_seconds = flush_timeout_seconds
        self._delivery_error: Any = None

    def _get_producer(self) -> Any:  # noqa: ANN401
        if self._producer is None:
            self._producer = Producer(self._properties.producer_config())
        return self._producer

    def _on_delivery(self, err: Any, msg: Any) -> None:  # noqa: ANN401
        if err is not None:
            self._delivery_error = err
            logger.warning("Order delivery failed", extra={"error": str(err)})
            return
        logger.info(
            "Order created",
            extra={
                "order_id": (msg.key() or b"").decode(),
                "partition": msg.partition(),
                "offset": msg.offset(),
            },
        )

    def send(self, order: Order) -> None:
        """注文を 1 件発行し、配信完了まで待つ。"""
        value = self._serializer(order.to_record())
        self._delivery_error = None
        try:
            producer = self._get_producer()
            producer.produce(
                topic=self._topic,
                key=order.id.encode(),
                value=value,
                on_delivery=self._on_delivery,
            )
            remaining = producer.flush(timeout=self._flush_timeout_seconds)
        except (KafkaException, BufferError) as e:
            raise KafkaError(
                code=KafkaErrorCodes.PUBLISH_FAILED,
                message=f"Failed to publish order {order.id} to {self._topic}: {e}",
                cause=e,
            ) from e
        if remaining:
            raise KafkaError(
                code=KafkaErrorCodes.PUBLISH_FAILED,
                message=f"Order {order.id} not delivered within {self._flush_timeout_seconds}s",
            )
        if self._delivery_error is not None:
            raise KafkaError(
                code=KafkaErrorCodes.PUBLISH_FAILED,
                message=f"Order {order.id} delivery failed: {self._delivery_error}",
            )

    def run(
        self,
        count: int | None = None,
        interval_seconds: float = 1.0,
        stop_event: threading.Event | None = None,
    ) -> int:
        """ランダムな注文を一定間隔で発行し続け、発行件数を返す。

        count に達するか stop_event がセットされると終了する。
        """
        stop = stop_event or threading.Event()
        sent = 0
        while not stop.is_set() and (count is None or sent < count):
            self.send(Order())
            sent += 1
            if count is not None and sent >= count:
                break
            stop.wait(interval_seconds)
        return sent

    def close(self) -> None:
        """未送信メッセージをフラッシュする。"""
        if self._producer is not None:
            remaining = self._producer.flush(self._flush_timeout_seconds)
            if remaining:
                logger.warning(
                    "Orders not delivered before close",
                    extra={"topic": self._topic, "remaining": remaining},
                )
            self._producer = None

    def __enter__(self) -> OrderProducer:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
