"""Responses returned by the action handlers, and their JSON form."""

from __future__ import annotations

import base64
import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from chaindex.actions.sources import PageResponse, UnbondingDelegationEntry
from chaindex.coins import Coin, Dec, DecCoin


@dataclass(frozen=True)
class CoinAmount:
    amount: str
    denom: str


def convert_coins(coins: Iterable[Coin]) -> list[CoinAmount]:
    return [CoinAmount(amount=str(coin.amount), denom=coin.denom) for coin in coins]


def convert_dec_coins(coins: Iterable[DecCoin]) -> list[CoinAmount]:
    return [CoinAmount(amount=str(coin.amount), denom=coin.denom) for coin in coins]


@dataclass(frozen=True)
class Address:
    address: str


@dataclass(frozen=True)
class Balance:
    coins: list[CoinAmount]


@dataclass(frozen=True)
class Delegation:
    delegator_address: str
    validator_address: str
    coins: list[CoinAmount]


@dataclass(frozen=True)
class DelegationResponse:
    delegations: list[Delegation]
    pagination: Optional[PageResponse]


@dataclass(frozen=True)
class DelegationReward:
    coins: list[CoinAmount]
    validator_address: str


@dataclass(frozen=True)
class ValidatorCommissionAmount:
    coins: list[CoinAmount]


@dataclass(frozen=True)
class UnbondingDelegation:
    delegator_address: str
    validator_address: str
    entries: list[UnbondingDelegationEntry]


@dataclass(frozen=True)
class UnbondingDelegationResponse:
    unbonding_delegations: list[UnbondingDelegation]
    pagination: Optional[PageResponse]


@dataclass(frozen=True)
class RedelegationEntry:
    completion_time: datetime
    balance: int = field(metadata={"string": True})


@dataclass(frozen=True)
class Redelegation:
    delegator_address: str
    validator_src_address: str
    validator_dst_address: str
    entries: list[RedelegationEntry] = field(default_factory=list)


@dataclass(frozen=True)
class RedelegationResponse:
    redelegations: list[Redelegation]
    pagination: Optional[PageResponse]


@dataclass(frozen=True)
class GraphQLError:
    message: str


def _rfc3339(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    if value.microsecond:
        text += f".{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset()
    if not offset:
        return text + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{mins:02d}"


def to_jsonable(value: Any) -> Any:
    """Turn a response into plain values that ``json.dumps`` accepts."""
    if value is None or isinstance(value, (bool, str, int, float)):
        return value
    if isinstance(value, BaseException):
        return {}
    if isinstance(value, Dec):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode()
    if isinstance(value, datetime):
        return _rfc3339(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        result = {}
        for item in dataclasses.fields(value):
            item_value = getattr(value, item.name)
            if item.metadata.get("omitempty") and not item_value:
                continue
            if item.metadata.get("string"):
                result[item.name] = str(item_value)
            else:
                result[item.name] = to_jsonable(item_value)
        return result
    if isinstance(value, Mapping):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    raise TypeError(f"cannot encode {type(value).__name__} as JSON")