"""Client properties file loading (key = value format)."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from config.defaults import (
    CONNECT_TIMEOUT_KEY,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_CONTENT_LENGTH,
    DEFAULT_OP_TIMEOUT,
    MAX_CONTENT_LENGTH_KEY,
    OP_TIMEOUT_KEY,
)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    op_timeout: float = DEFAULT_OP_TIMEOUT
    max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH

    @classmethod
    def from_properties(cls, props: dict[str, str]) -> ClientConfig:
        config = cls()
        if CONNECT_TIMEOUT_KEY in props:
            config = replace(config, connect_timeout=_positive_float(props, CONNECT_TIMEOUT_KEY))
        if OP_TIMEOUT_KEY in props:
            config = replace(config, op_timeout=_positive_float(props, OP_TIMEOUT_KEY))
        if MAX_CONTENT_LENGTH_KEY in props:
            config = replace(config, max_content_length=_positive_int(props, MAX_CONTENT_LENGTH_KEY))
        return config


def parse_properties(text: str) -> dict[str, str]:
    props: dict[str, str] = {}
    pending = ""
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not pending and (line == "" or line[0] in "#!"):
            continue
        if line.endswith("\\"):
            pending += line[:-1]
            continue
        line = pending + line
        pending = ""
        _store(props, line)
    if pending:
        _store(props, pending)
    return props


def load_properties(path: str | Path) -> dict[str, str]:
    fname = Path(path).expanduser()
    try:
        text = fname.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"failed to read {fname}: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f"failed to read {fname}: {exc}") from exc
    return parse_properties(text)


def load_client_config(path: str | Path | None) -> ClientConfig:
    if path is None:
        return ClientConfig()
    return ClientConfig.from_properties(load_properties(path))


def _store(props: dict[str, str], line: str) -> None:
    positions = [pos for pos in (line.find("="), line.find(":")) if pos >= 0]
    if not positions:
        props[line.strip()] = ""
        return
    pos = min(positions)
    key = line[:pos].strip()
    if key:
        props[key] = line[pos + 1 :].strip()


def _positive_float(props: dict[str, str], key: str) -> float:
    raw = props[key]
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"`{key}` must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"`{key}` must be > 0, got {raw!r}")
    return value


def _positive_int(props: dict[str, str], key: str) -> int:
    raw = props[key]
    try:
        value = int(raw, 0)
    except ValueError:
        raise ConfigError(f"`{key}` must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"`{key}` must be > 0, got {raw!r}")
    return value
