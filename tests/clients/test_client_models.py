"""clients モデルのユニットテスト"""

import json

from ccloud_clients.models import ClientProperties, Order, SecurityProtocol, load_order_schema
from ccloud_schema_registry import compile_schema


def make_properties(**overrides: str) -> ClientProperties:
    props = {
        "bootstrap.servers": "broker:9092",
        "sasl.username": "key",
        "sasl.password": "secret",
        "schema.registry.url": "http://registry:8081",
        "schema.registry.basic.auth.username": "sr-key",
        "schema.registry.basic.auth.password": "sr-secret",
    }
    props.update(overrides)
    return ClientProperties.model_validate(props)


def test_to_confluent_config_sasl() -> None:
    """SASL_SSL（デフォルト）では SASL 設定が含まれること。"""
    config = make_properties().to_confluent_config()
    assert config["bootstrap.servers"] == "broker:9092"
    assert config["security.protocol"] == "SASL_SSL"
    assert config["sasl.mechanism"] == "PLAIN"
    assert config["sasl.username"] == "key"
    assert config["sasl.password"] == "secret"


def test_to_confluent_config_plaintext() -> None:
    """PLAINTEXT では security.protocol と SASL 設定を含まないこと。"""
    props = make_properties(**{"security.protocol": "PLAINTEXT"})
    assert props.security_protocol == SecurityProtocol.PLAINTEXT
    config = props.to_confluent_config()
    assert "security.protocol" not in config
    assert "sasl.username" not in config


def test_consumer_config() -> None:
    """コンシューマー設定にグループとオフセットリセットが入ること。"""
    config = make_properties().consumer_config("group-1", "earliest")
    assert config["group.id"] == "group-1"
    assert config["auto.offset.reset"] == "earliest"


def test_registry_config() -> None:
    """Schema Registry 設定に変換できること。"""
    config = make_properties().registry_config()
    assert config.url == "http://registry:8081"
    assert config.username == "sr-key"
    assert config.password == "sr-secret"
    assert config.caching_enabled is True


def test_populate_by_field_name() -> None:
    """フィールド名でも生成できること。"""
    props = ClientProperties(bootstrap_servers="b:9092", schema_registry_url="http://r")
    assert props.bootstrap_servers == "b:9092"


def test_order_defaults_and_record() -> None:
    """Order のデフォルト値とレコード変換。"""
    order = Order()
    assert len(order.id) == 36
    assert order.date > 0
    assert 0 <= order.amount < 1000
    assert Order.from_record(order.to_record()) == order


def test_order_schema_compiles_and_encodes_order() -> None:
    """同梱の orders.avsc で Order をエンコードできること。"""
    schema = load_order_schema()
    assert json.loads(schema)["name"] == "Order"
    codec = compile_schema(schema)
    record = Order(id="x", date=1, amount=2.0).to_record()
    assert codec.decode(codec.encode(record)) == record
