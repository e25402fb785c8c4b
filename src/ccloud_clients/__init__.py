"""ccloud clients: Avro order producer/consumer for Confluent Cloud."""

from .consumer import OrderConsumer
from .exceptions import ConfigError, ConfigErrorCodes, KafkaError, KafkaErrorCodes
from .logger import new_logger
from .models import ORDERS_TOPIC, ClientProperties, Order, SecurityProtocol, load_order_schema
from .producer import OrderProducer
from .properties import load_client_properties, load_properties, parse_properties
from .topic import create_topic

__all__ = [
    "ClientProperties",
    "SecurityProtocol",
    "Order",
    "ORDERS_TOPIC",
    "load_order_schema",
    "load_properties",
    "load_client_properties",
    "parse_properties",
    "create_topic",
    "OrderProducer",
    "OrderConsumer",
    "new_logger",
    "ConfigError",
    "ConfigErrorCodes",
    "KafkaError",
    "KafkaErrorCodes",
]
