"""Configuration of the actions module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

import yaml

DEFAULT_PORT = 3000


@dataclass(frozen=True)
class ActionsConfig:
    """The port the actions server listens on, and an optional remote node to query."""

    port: int = DEFAULT_PORT
    node: Optional[dict[str, Any]] = None

    def __post_init__(self) -> None:
        if isinstance(self.port, bool) or not isinstance(self.port, int) or self.port < 0:
            raise ValueError(f"invalid port: {self.port!r}")
        if self.node is not None and not isinstance(self.node, dict):
            raise ValueError(f"invalid node details: {self.node!r}")


def default_config() -> ActionsConfig:
    """Return the default configuration."""
    return ActionsConfig(port=DEFAULT_PORT, node=None)


def parse_config(data: Union[bytes, str]) -> Optional[ActionsConfig]:
    """Read the ``actions`` section of a YAML document; ``None`` if it has none."""
    if isinstance(data, (bytes, bytearray)):
        data = data.decode()
    try:
        document = yaml.safe_load(data)
    except yaml.YAMLError as err:
        raise ValueError(f"invalid configuration: {err}") from err
    if document is None:
        return None
    if not isinstance(document, dict):
        raise ValueError("invalid configuration: expected a mapping")
    section = document.get("actions")
    if section is None:
        return None
    if not isinstance(section, dict):
        raise ValueError("invalid configuration: the actions section must be a mapping")
    port = section.get("port", 0)
    if port is None:
        port = 0
    return ActionsConfig(port=port, node=section.get("node"))