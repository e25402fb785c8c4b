"""OrderConsumer のユニットテスト（confluent-kafka モック）"""

import threading
from unittest.mock import MagicMock, patch

import pytest
from ccloud_clients.consumer import OrderConsumer
from ccloud_clients.exceptions import KafkaError, KafkaErrorCodes
from ccloud_clients.models import Order, load_order_schema
from ccloud_schema_registry import NotFoundError, compile_schema, envelope
from confluent_kafka import KafkaError as ConfluentKafkaError


def make_message(value: bytes | None = None, error: object = None) -> MagicMock:
    msg = MagicMock()
    msg.error.return_value = error
    msg.value.return_value = value
    return msg


def encoded_order(registry, order: Order) -> bytes:
    schema = load_order_schema()
    schema_id = registry.create_subject("orders", schema)
    return envelope.pack(schema_id, compile_schema(schema).encode(order.to_record()))


def test_poll_decodes_record(properties, registry) -> None:
    """受信レコードをスキーマ ID で解決してデコードすること。"""
    order = Order(id="o-1", date=5, amount=1.5)
    kafka = MagicMock()
    kafka.poll.return_value = make_message(encoded_order(registry, order))
    consumer = OrderConsumer(properties, registry, consumer=kafka)

    assert consumer.poll(0.5) == order.to_record()
    kafka.subscribe.assert_called_once_with(["orders"])
    kafka.poll.assert_called_once_with(timeout=0.5)


def test_poll_timeout_returns_none(properties, registry) -> None:
    """メッセージがなければ None。"""
    kafka = MagicMock()
    kafka.poll.return_value = None
    assert OrderConsumer(properties, registry, consumer=kafka).poll() is None


def test_poll_ignores_partition_eof(properties, registry) -> None:
    """パーティション末尾イベントは None として扱うこと。"""
    kafka = MagicMock()
    kafka.poll.return_value = make_message(
        error=ConfluentKafkaError(ConfluentKafkaError._PARTITION_EOF)
    )
    assert OrderConsumer(properties, registry, consumer=kafka).poll() is None


def test_poll_broker_error(properties, registry) -> None:
    """その他の Kafka エラーは KafkaError(RECEIVE_FAILED)。"""
    kafka = MagicMock()
    kafka.poll.return_value = make_message(
        error=ConfluentKafkaError(ConfluentKafkaError._TRANSPORT)
    )
    with pytest.raises(KafkaError) as exc_info:
        OrderConsumer(properties, registry, consumer=kafka).poll()
    assert exc_info.value.code == KafkaErrorCodes.RECEIVE_FAILED


def test_poll_unknown_schema_propagates(properties, registry) -> None:
    """未登録スキーマ ID のレコードはレジストリのエラーが伝播すること。"""
    kafka = MagicMock()
    kafka.poll.return_value = make_message(envelope.pack(404, b""))
    with pytest.raises(NotFoundError):
        OrderConsumer(properties, registry, consumer=kafka).poll()


def test_run_feeds_handler(properties, registry) -> None:
    """max_messages 件のレコードを handler に渡すこと。"""
    orders = [Order(id=f"o-{i}", date=i, amount=float(i)) for i in range(2)]
    kafka = MagicMock()
    kafka.poll.side_effect = [
        make_message(encoded_order(registry, orders[0])),
        None,
        make_message(encoded_order(registry, orders[1])),
    ]
    received: list[dict] = []
    consumer = OrderConsumer(properties, registry, consumer=kafka)

    assert consumer.run(received.append, max_messages=2) == 2
    assert received == [o.to_record() for o in orders]


def test_run_stops_on_event(properties, registry) -> None:
    """stop_event がセット済みなら受信しないこと。"""
    kafka = MagicMock()
    stop = threading.Event()
    stop.set()
    consumer = OrderConsumer(properties, registry, consumer=kafka)
    assert consumer.run(lambda record: None, stop_event=stop) == 0
    kafka.poll.assert_not_called()


def test_lazily_creates_kafka_consumer(properties, registry) -> None:
    """consumer 未指定時は設定から confluent-kafka Consumer を生成し、close で閉じること。"""
    kafka = MagicMock()
    kafka.poll.return_value = None
    with patch("ccloud_clients.consumer.Consumer", return_value=kafka) as consumer_cls:
        with OrderConsumer(properties, registry, group_id="g1") as consumer:
            consumer.poll()
    consumer_cls.assert_called_once_with(properties.consumer_config("g1", "latest"))
    kafka.close.assert_called_once()
