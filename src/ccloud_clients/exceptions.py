"""clients の例外型定義"""

from __future__ import annotations


class ConfigError(Exception):
    """設定ファイル読み込みのエラー。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class ConfigErrorCodes:
    """ConfigError のエラーコード定数。"""

    READ_FILE: str = "READ_FILE_ERROR"
    PARSE: str = "PARSE_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"


class KafkaError(Exception):
    """Kafka 操作のエラー。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class KafkaErrorCodes:
    """KafkaError のエラーコード定数。"""

    TOPIC_CREATION_FAILED: str = "TOPIC_CREATION_FAILED"
    PUBLISH_FAILED: str = "PUBLISH_FAILED"
    RECEIVE_FAILED: str = "RECEIVE_FAILED"
