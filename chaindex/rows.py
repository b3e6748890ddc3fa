"""Rows of the general-purpose database tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Iterator, Optional

from chaindex.coins import DbCoins, DbDecCoins


@dataclass(frozen=True)
class AccountRow:
    """A row of the account table."""

    address: str


@dataclass(frozen=True)
class GenesisRow:
    """A row of the genesis table."""

    chain_id: str
    time: datetime
    initial_height: int
    one_row_id: bool = field(default=True, compare=False)


@dataclass(frozen=True)
class ConsensusRow:
    """A row of the consensus table."""

    height: int
    round: int
    step: str
    one_row_id: bool = field(default=True, compare=False)


@dataclass(frozen=True)
class AverageTimeRow:
    """The average block time over a minute, hour or day."""

    average_time: float
    height: int
    one_row_id: bool = field(default=True, compare=False)


@dataclass(frozen=True)
class BlockRow:
    """A block stored inside the database."""

    height: int
    hash: str
    num_txs: int
    total_gas: int
    proposer_address: Optional[str]
    pre_commits: int
    timestamp: datetime


@dataclass(frozen=True)
class DistributionParamsRow:
    """A row of the distribution_params table."""

    params: str
    height: int
    one_row_id: bool = field(default=True, compare=False)


@dataclass(frozen=True)
class CommunityPoolRow:
    """A row of the community_pool table."""

    coins: DbDecCoins
    height: int
    one_row_id: bool = field(default=True, compare=False)


@dataclass(frozen=True)
class FeeAllowanceRow:
    """A row of the fee_grant_allowance table."""

    id: int
    grantee: str
    granter: str
    allowance: str
    height: int


@dataclass(frozen=True)
class InflationRow:
    """A row of the inflation table."""

    value: float
    height: int
    one_row_id: bool = field(default=True, compare=False)


@dataclass(frozen=True)
class MintParamsRow:
    """A row of the mint_params table."""

    params: str
    height: int
    one_row_id: bool = field(default=True, compare=False)


@dataclass(frozen=True)
class TokenUnitRow:
    """A row of the token_unit table."""

    token_name: str
    denom: str
    exponent: int
    aliases: tuple[str, ...] = ()
    price_id: Optional[str] = None


@dataclass(frozen=True)
class TokenRow:
    """A row of the token table."""

    name: str
    traded_unit: str


@dataclass(frozen=True)
class TokenPriceRow:
    """A row of the token_price table."""

    name: str
    price: float
    market_cap: int
    timestamp: datetime
    id: str = field(default="", compare=False)


@dataclass(frozen=True)
class StakingParamsRow:
    """A row of the staking_params table."""

    params: str
    height: int
    one_row_id: bool = field(default=True, compare=False)


@dataclass(frozen=True)
class StakingPoolRow:
    """A row of the staking_pool table."""

    bonded_tokens: int
    not_bonded_tokens: int
    unbonding_tokens: int
    staked_not_bonded_tokens: int
    height: int
    one_row_id: bool = field(default=True, compare=False)


@dataclass(frozen=True)
class SupplyRow:
    """A row of the supply table."""

    coins: DbCoins
    height: int
    one_row_id: bool = field(default=True, compare=False)


@dataclass(frozen=True)
class SoftwareUpgradePlanRow:
    """A row of the software_upgrade_plan table."""

    proposal_id: int
    plan_name: str
    upgrade_height: int
    info: str
    height: int


@dataclass(frozen=True)
class ModuleRow:
    """A row of the modules table."""

    module: str


class ModuleRows:
    """An ordered list of module rows."""

    def __init__(self, rows: Iterable[ModuleRow] = ()) -> None:
        self._rows = tuple(rows)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "ModuleRows":
        return cls(ModuleRow(module=name) for name in names)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[ModuleRow]:
        return iter(self._rows)

    def __getitem__(self, index: int) -> ModuleRow:
        return self._rows[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModuleRows):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __repr__(self) -> str:
        return f"ModuleRows({list(self._rows)!r})"