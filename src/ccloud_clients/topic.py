"""トピック作成ユーティリティ"""

from __future__ import annotations

import logging

from confluent_kafka import KafkaError as ConfluentKafkaError
from confluent_kafka import KafkaException
from confluent_kafka.admin import AdminClient, NewTopic

from .exceptions import KafkaError, KafkaErrorCodes
from .models import ORDERS_TOPIC, ClientProperties

logger = logging.getLogger(__name__)


def create_topic(
    properties: ClientProperties,
    topic: str = ORDERS_TOPIC,
    partitions: int = 4,
    replication_factor: int = 3,
    timeout_seconds: float = 60.0,
) -> bool:
    """トピックが存在しなければ作成する。

    Returns:
        作成した場合は True、既に存在した場合は False

    Raises:
        KafkaError: 作成に失敗した場合
    """
    admin = AdminClient(properties.to_confluent_config())
    futures = admin.create_topics(
        [NewTopic(topic, num_partitions=partitions, replication_factor=replication_factor)],
        operation_timeout=timeout_seconds,
    )
    try:
        futures[topic].result()
    except KafkaException as e:
        error = e.args[0] if e.args else None
        if (
            isinstance(error, ConfluentKafkaError)
            and error.code() == ConfluentKafkaError.TOPIC_ALREADY_EXISTS
        ):
            logger.info("Topic already exists", extra={"topic": topic})
            return False
        raise KafkaError(
            code=KafkaErrorCodes.TOPIC_CREATION_FAILED,
            message=f"Topic creation failed for {topic}: {e}",
            cause=e,
        ) from e
    logger.info("Topic created", extra={"topic": topic, "partitions": partitions})
    return True
