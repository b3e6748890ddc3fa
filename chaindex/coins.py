"""Coin amounts and their textual database representation."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union

PRECISION = 18
_SCALE = 10**PRECISION

_DENOM_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9/:._-]{2,127}")
_DEC_RE = re.compile(r"(-?)(\d*)(?:\.(\d*))?")


@dataclass(frozen=True, order=True)
class Dec:
    """Fixed-point decimal with 18 digits of precision."""

    raw: int = 0

    @classmethod
    def from_str(cls, text: str) -> "Dec":
        """Parse a decimal string such as ``"-12.5"``."""
        match = _DEC_RE.fullmatch(text.strip()) if isinstance(text, str) else None
        if match is None:
            raise ValueError(f"invalid decimal string: {text!r}")
        sign, int_part, frac_part = match.groups()
        if frac_part is not None and frac_part == "":
            raise ValueError(f"decimal string cannot end with a '.': {text!r}")
        frac_part = frac_part or ""
        if not int_part and not frac_part:
            raise ValueError(f"empty decimal string: {text!r}")
        if len(frac_part) > PRECISION:
            raise ValueError(
                f"too much precision, maximum {PRECISION}, got {len(frac_part)}: {text!r}"
            )
        combined = int((int_part or "0") + frac_part.ljust(PRECISION, "0"))
        return cls(-combined if sign else combined)

    @classmethod
    def from_int(cls, value: int) -> "Dec":
        """Build a decimal holding the given integer."""
        return cls(int(value) * _SCALE)

    @classmethod
    def with_prec(cls, value: int, prec: int) -> "Dec":
        """Build ``value * 10**-prec``."""
        if not 0 <= prec <= PRECISION:
            raise ValueError(f"precision must be between 0 and {PRECISION}, got {prec}")
        return cls(int(value) * 10 ** (PRECISION - prec))

    def __add__(self, other: "Dec") -> "Dec":
        if not isinstance(other, Dec):
            return NotImplemented
        return Dec(self.raw + other.raw)

    def __str__(self) -> str:
        sign = "-" if self.raw < 0 else ""
        whole, frac = divmod(abs(self.raw), _SCALE)
        return f"{sign}{whole}.{frac:0{PRECISION}d}"


def _validate_denom(denom: str) -> None:
    if not isinstance(denom, str) or _DENOM_RE.fullmatch(denom) is None:
        raise ValueError(f"invalid denom: {denom!r}")


@dataclass(frozen=True)
class Coin:
    """An integer amount of a given denomination."""

    denom: str
    amount: int

    def __post_init__(self) -> None:
        _validate_denom(self.denom)
        if self.amount < 0:
            raise ValueError(f"negative coin amount: {self.amount}")


@dataclass(frozen=True)
class DecCoin:
    """A decimal amount of a given denomination."""

    denom: str
    amount: Dec

    def __post_init__(self) -> None:
        _validate_denom(self.denom)
        if self.amount.raw < 0:
            raise ValueError(f"negative coin amount: {self.amount}")


def to_string(value: Optional[str]) -> str:
    """Return the value of a nullable string, or an empty string for NULL."""
    return value if value is not None else ""


def to_null_string(value: str) -> Optional[str]:
    """Trim the value and turn an empty result into NULL."""
    value = value.strip()
    return value or None


def remove_empty(values: Iterable[str]) -> list[str]:
    """Drop empty strings, keeping the order of the others."""
    return [value for value in values if value != ""]


def _decode(src: Union[bytes, str]) -> str:
    return src.decode() if isinstance(src, (bytes, bytearray)) else str(src)


def _strip_single(src: Union[bytes, str]) -> tuple[str, str]:
    text = _decode(src)
    for char in '"{}()':
        text = text.replace(char, "")
    values = text.split(",")
    if len(values) < 2:
        raise ValueError(f"malformed coin value: {_decode(src)!r}")
    return values[0], values[1]


def _split_many(src: Union[bytes, str]) -> list[tuple[str, str]]:
    text = _decode(src)
    for char in '"{}':
        text = text.replace(char, "")
    text = text.replace("),(", ") (").replace("(", "").replace(")", "")
    pairs = []
    for value in remove_empty(text.split(" ")):
        parts = value.split(",")
        if len(parts) < 2:
            raise ValueError(f"malformed coin value: {value!r}")
        pairs.append((parts[0], parts[1]))
    return pairs


@dataclass(frozen=True)
class DbCoin:
    """A coin as stored inside the database."""

    denom: str
    amount: str

    @classmethod
    def from_coin(cls, coin: Coin) -> "DbCoin":
        return cls(denom=coin.denom, amount=str(coin.amount))

    def to_value(self) -> str:
        """Return the composite literal used to store this coin."""
        return f"({self.denom},{self.amount})"

    @classmethod
    def parse(cls, src: Union[bytes, str]) -> "DbCoin":
        """Read a coin from its stored composite representation."""
        denom, amount = _strip_single(src)
        return cls(denom=denom, amount=amount)

    def to_coin(self) -> Coin:
        try:
            amount = int(self.amount)
        except ValueError:
            raise ValueError(f"invalid coin amount: {self.amount!r}") from None
        return Coin(self.denom, amount)


class DbCoins:
    """An ordered list of database coins."""

    def __init__(self, coins: Iterable[DbCoin] = ()) -> None:
        self._coins = tuple(coins)

    @classmethod
    def from_coins(cls, coins: Iterable[Coin]) -> "DbCoins":
        return cls(DbCoin.from_coin(coin) for coin in coins)

    @classmethod
    def parse(cls, src: Union[bytes, str]) -> "DbCoins":
        """Read coins from a stored array of composite values."""
        return cls(DbCoin(denom=d, amount=a) for d, a in _split_many(src))

    def to_coins(self) -> list[Coin]:
        return [coin.to_coin() for coin in self._coins]

    def __len__(self) -> int:
        return len(self._coins)

    def __iter__(self) -> Iterator[DbCoin]:
        return iter(self._coins)

    def __getitem__(self, index: int) -> DbCoin:
        return self._coins[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DbCoins):
            return NotImplemented
        return self._coins == other._coins

    def __hash__(self) -> int:
        return hash(self._coins)

    def __repr__(self) -> str:
        return f"DbCoins({list(self._coins)!r})"


@dataclass(frozen=True)
class DbDecCoin:
    """A decimal coin as stored inside the database."""

    denom: str
    amount: str

    @classmethod
    def from_dec_coin(cls, coin: DecCoin) -> "DbDecCoin":
        return cls(denom=coin.denom, amount=str(coin.amount))

    def to_value(self) -> str:
        """Return the composite literal used to store this coin."""
        return f"({self.denom},{self.amount})"

    @classmethod
    def parse(cls, src: Union[bytes, str]) -> "DbDecCoin":
        """Read a decimal coin from its stored composite representation."""
        denom, amount = _strip_single(src)
        return cls(denom=denom, amount=amount)

    def to_dec_coin(self) -> DecCoin:
        return DecCoin(self.denom, Dec.from_str(self.amount))


class DbDecCoins:
    """An ordered list of database decimal coins."""

    def __init__(self, coins: Iterable[DbDecCoin] = ()) -> None:
        self._coins = tuple(coins)

    @classmethod
    def from_dec_coins(cls, coins: Iterable[DecCoin]) -> "DbDecCoins":
        return cls(DbDecCoin.from_dec_coin(coin) for coin in coins)

    @classmethod
    def parse(cls, src: Union[bytes, str]) -> "DbDecCoins":
        """Read decimal coins from a stored array of composite values."""
        return cls(DbDecCoin(denom=d, amount=a) for d, a in _split_many(src))

    def to_dec_coins(self) -> list[DecCoin]:
        return [coin.to_dec_coin() for coin in self._coins]

    def __len__(self) -> int:
        return len(self._coins)

    def __iter__(self) -> Iterator[DbDecCoin]:
        return iter(self._coins)

    def __getitem__(self, index: int) -> DbDecCoin:
        return self._coins[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DbDecCoins):
            return NotImplemented
        return self._coins == other._coins

    def __hash__(self) -> int:
        return hash(self._coins)

    def __repr__(self) -> str:
        return f"DbDecCoins({list(self._coins)!r})"