"""Payload of an action request and the context the handlers run in."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from chaindex.actions.sources import BankSource, DistributionSource, StakingSource

_INT64 = (-(2**63), 2**63 - 1)
_UINT64 = (0, 2**64 - 1)


@dataclass(frozen=True)
class PageRequest:
    """Pagination requested by a query."""

    offset: int = 0
    limit: int = 0
    count_total: bool = False
    key: bytes = b""


@dataclass(frozen=True)
class PayloadArgs:
    address: str = ""
    height: int = 0
    offset: int = 0
    limit: int = 0
    count_total: bool = False


def _integer(data: dict, name: str, bounds: tuple[int, int]) -> int:
    value = data.get(name)
    if value is None:
        return 0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"invalid value for {name}: {value!r}")
    if not bounds[0] <= value <= bounds[1]:
        raise ValueError(f"value out of range for {name}: {value!r}")
    return value


@dataclass(frozen=True)
class Payload:
    """The data sent along with an action request."""

    session_variables: dict[str, Any] = field(default_factory=dict)
    input: PayloadArgs = field(default_factory=PayloadArgs)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Payload":
        """Build a payload from decoded JSON, raising ValueError on wrong types."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("payload must be a JSON object")
        session = data.get("session_variables") or {}
        if not isinstance(session, dict):
            raise ValueError("session_variables must be an object")
        args = data.get("input") or {}
        if not isinstance(args, dict):
            raise ValueError("input must be an object")
        address = args.get("address") or ""
        if not isinstance(address, str):
            raise ValueError(f"invalid value for address: {address!r}")
        count_total = args.get("count_total") or False
        if not isinstance(count_total, bool):
            raise ValueError(f"invalid value for count_total: {count_total!r}")
        return cls(
            session_variables=dict(session),
            input=PayloadArgs(
                address=address,
                height=_integer(args, "height", _INT64),
                offset=_integer(args, "offset", _UINT64),
                limit=_integer(args, "limit", _UINT64),
                count_total=count_total,
            ),
        )

    def address(self) -> str:
        """Return the address the request is about, if any."""
        return self.input.address

    def pagination(self) -> PageRequest:
        """Return the pagination the request asks for."""
        return PageRequest(
            offset=self.input.offset, limit=self.input.limit, count_total=self.input.count_total
        )


class Node(Protocol):
    def latest_height(self) -> int: ...


@dataclass(frozen=True)
class Sources:
    bank: BankSource
    distribution: DistributionSource
    staking: StakingSource


@dataclass(frozen=True)
class Context:
    """What the action handlers need: a node and the data sources."""

    node: Node
    sources: Sources

    def get_height(self, payload: Optional[Payload]) -> int:
        """Return the requested height, or the latest chain height when none is given."""
        if payload is None or payload.input.height == 0:
            try:
                return self.node.latest_height()
            except Exception as err:
                raise RuntimeError(
                    f"error while getting chain latest block height: {err}"
                ) from err
        return payload.input.height