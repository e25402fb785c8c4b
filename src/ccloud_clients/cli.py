"""ccloud-clients コマンドラインインターフェース（Typer）"""

import json
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Annotated, Any

import structlog
import typer

from ccloud_schema_registry import HttpSchemaRegistryClient, SchemaRegistryError

from .consumer import DEFAULT_GROUP_ID, OrderConsumer
from .exceptions import ConfigError, KafkaError
from .logger import new_logger
from .models import ORDERS_TOPIC, ClientProperties
from .producer import OrderProducer
from .properties import load_client_properties
from .topic import create_topic

app = typer.Typer(
    help="Confluent Cloud order producer/consumer with Schema Registry.",
    no_args_is_help=True,
)


class LogFormat(StrEnum):
    JSON = "json"
    TEXT = "text"


@dataclass
class _State:
    config_path: Path
    log: structlog.stdlib.BoundLogger


TopicOption = Annotated[str, typer.Option("--topic", "-t", help="Topic name (also the subject).")]


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Path, typer.Option("--config", "-c", help="Path to ccloud.properties.")
    ] = Path("ccloud.properties"),
    log_level: Annotated[str, typer.Option(help="Log level.")] = "INFO",
    log_format: Annotated[LogFormat, typer.Option(help="Log output format.")] = LogFormat.JSON,
) -> None:
    ctx.obj = _State(config_path=config, log=new_logger(log_level, log_format.value))


def _load(state: _State) -> ClientProperties:
    try:
        return load_client_properties(state.config_path)
    except ConfigError as e:
        state.log.error("Failed to load properties", path=str(state.config_path), error=str(e))
        raise typer.Exit(code=1) from e


def _registry(properties: ClientProperties) -> HttpSchemaRegistryClient:
    return HttpSchemaRegistryClient.from_config(properties.registry_config(caching_enabled=True))


@app.command("create-topic")
def create_topic_command(
    ctx: typer.Context,
    topic: TopicOption = ORDERS_TOPIC,
    partitions: Annotated[int, typer.Option(min=1)] = 4,
    replication_factor: Annotated[int, typer.Option(min=1)] = 3,
) -> None:
    """トピックが存在しなければ作成する。"""
    state: _State = ctx.obj
    log = state.log.bind(command=ctx.info_name, topic=topic)
    properties = _load(state)
    try:
        created = create_topic(properties, topic, partitions, replication_factor)
    except KafkaError as e:
        log.error("Topic creation failed", error=str(e))
        raise typer.Exit(code=1) from e
    log.info("Topic ready", created=created)


@app.command()
def produce(
    ctx: typer.Context,
    topic: TopicOption = ORDERS_TOPIC,
    count: Annotated[int | None, typer.Option(min=1, help="Stop after N orders.")] = None,
    interval: Annotated[float, typer.Option(min=0.0, help="Seconds between orders.")] = 1.0,
) -> None:
    """ランダムな注文を発行し続ける。"""
    state: _State = ctx.obj
    log = state.log.bind(command=ctx.info_name, topic=topic)
    properties = _load(state)
    with _registry(properties) as registry, OrderProducer(properties, registry, topic) as producer:
        try:
            sent = producer.run(count=count, interval_seconds=interval)
        except KeyboardInterrupt:
            return
        except (KafkaError, SchemaRegistryError) as e:
            log.error("Producer stopped", error=str(e))
            raise typer.Exit(code=1) from e
    log.info("Producer finished", sent=sent)


@app.command()
def consume(
    ctx: typer.Context,
    topic: TopicOption = ORDERS_TOPIC,
    group_id: Annotated[str, typer.Option(help="Consumer group id.")] = DEFAULT_GROUP_ID,
    max_messages: Annotated[int | None, typer.Option(min=1, help="Stop after N records.")] = None,
) -> None:
    """注文を受信してデコードし、JSON で出力する。"""
    state: _State = ctx.obj
    log = state.log.bind(command=ctx.info_name, topic=topic)
    properties = _load(state)

    def _print(record: Any) -> None:  # noqa: ANN401
        typer.echo(json.dumps(record))

    with _registry(properties) as registry, OrderConsumer(
        properties, registry, topic, group_id=group_id
    ) as consumer:
        try:
            consumer.run(_print, max_messages=max_messages)
        except KeyboardInterrupt:
            return
        except (KafkaError, SchemaRegistryError) as e:
            log.error("Consumer stopped", error=str(e))
            raise typer.Exit(code=1) from e
