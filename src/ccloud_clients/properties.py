"""ccloud.properties 読み込み"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import ValidationError

from .exceptions import ConfigError, ConfigErrorCodes
from .models import ClientProperties

_JAAS_CONFIG = "sasl.jaas.config"
_REGISTRY_USER_INFO = "schema.registry.basic.auth.user.info"
_JAAS_USERNAME = re.compile(r'username\s*=\s*"([^"]*)"')
_JAAS_PASSWORD = re.compile(r'password\s*=\s*"([^"]*)"')


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            code=ConfigErrorCodes.READ_FILE,
            message=f"Failed to read properties file: {path}",
            cause=e,
        ) from e


def _parse_jaas(value: str, lineno: int) -> dict[str, str]:
    username = _JAAS_USERNAME.search(value)
    password = _JAAS_PASSWORD.search(value)
    if username is None or password is None:
        raise ConfigError(
            code=ConfigErrorCodes.PARSE,
            message=f"line {lineno}: {_JAAS_CONFIG} has no username/password",
        )
    return {"sasl.username": username.group(1), "sasl.password": password.group(1)}


def _parse_user_info(value: str, lineno: int) -> dict[str, str]:
    username, sep, password = value.partition(":")
    if not sep:
        raise ConfigError(
            code=ConfigErrorCodes.PARSE,
            message=f"line {lineno}: {_REGISTRY_USER_INFO} must be 'user:password'",
        )
    return {
        "schema.registry.basic.auth.username": username.strip(),
        "schema.registry.basic.auth.password": password.strip(),
    }


def parse_properties(text: str) -> dict[str, str]:
    """properties 形式のテキストを辞書に変換する。

    空行と '#' / '//' で始まる行は無視する。sasl.jaas.config と
    schema.registry.basic.auth.user.info はユーザー名とパスワードに分解する。
    """
    props: dict[str, str] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith(("#", "//")):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            raise ConfigError(
                code=ConfigErrorCodes.PARSE,
                message=f"line {lineno}: expected 'key=value'",
            )
        key, value = key.strip(), value.strip()
        if key == _JAAS_CONFIG:
            props.update(_parse_jaas(value, lineno))
        elif key == _REGISTRY_USER_INFO:
            props.update(_parse_user_info(value, lineno))
        else:
            props[key] = value
    return props


def load_properties(path: Path) -> dict[str, str]:
    """properties ファイルを読み込んで辞書を返す。"""
    return parse_properties(_read_text(path))


def load_client_properties(path: Path) -> ClientProperties:
    """properties ファイルを読み込んで ClientProperties を返す。"""
    props = load_properties(path)
    try:
        return ClientProperties.model_validate(props)
    except ValidationError as e:
        raise ConfigError(
            code=ConfigErrorCodes.VALIDATION,
            message=f"Properties validation failed: {e}",
            cause=e,
        ) from e
