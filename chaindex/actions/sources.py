"""Records returned by the chain data sources, and the interfaces of those sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from chaindex.coins import Coin, DecCoin


@dataclass(frozen=True)
class AccountBalance:
    """The balance of an account at a given height."""

    address: str
    balance: tuple[Coin, ...]
    height: int


@dataclass(frozen=True)
class DelegationDelegatorReward:
    """The rewards a delegator has accrued with one validator."""

    validator_address: str
    reward: tuple[DecCoin, ...]


@dataclass(frozen=True)
class DelegationRecord:
    """A delegation together with its balance."""

    delegator_address: str
    validator_address: str
    balance: Coin


@dataclass(frozen=True)
class PageResponse:
    """Pagination details of a query response."""

    next_key: bytes = field(default=b"", metadata={"omitempty": True})
    total: int = field(default=0, metadata={"omitempty": True})


@dataclass(frozen=True)
class DelegationsPage:
    delegation_responses: tuple[DelegationRecord, ...] = ()
    pagination: Optional[PageResponse] = None


@dataclass(frozen=True)
class UnbondingDelegationEntry:
    """One entry of an unbonding delegation."""

    creation_height: int = field(metadata={"omitempty": True})
    completion_time: datetime
    initial_balance: int = field(metadata={"string": True})
    balance: int = field(metadata={"string": True})


@dataclass(frozen=True)
class UnbondingDelegationRecord:
    delegator_address: str
    validator_address: str
    entries: tuple[UnbondingDelegationEntry, ...] = ()


@dataclass(frozen=True)
class UnbondingDelegationsPage:
    unbonding_responses: tuple[UnbondingDelegationRecord, ...] = ()
    pagination: Optional[PageResponse] = None


@dataclass(frozen=True)
class RedelegationEntryRecord:
    """One entry of a redelegation, with its current balance."""

    completion_time: datetime
    balance: int


@dataclass(frozen=True)
class RedelegationRecord:
    delegator_address: str
    validator_src_address: str
    validator_dst_address: str
    entries: tuple[RedelegationEntryRecord, ...] = ()


@dataclass(frozen=True)
class RedelegationsPage:
    redelegation_responses: tuple[RedelegationRecord, ...] = ()
    pagination: Optional[PageResponse] = None


@dataclass(frozen=True)
class RedelegationsRequest:
    """Filters of a redelegations query; empty fields are not filtered on."""

    delegator_addr: str = ""
    src_validator_addr: str = ""
    dst_validator_addr: str = ""
    pagination: Any = None


@dataclass(frozen=True)
class StakingParams:
    bond_denom: str
    unbonding_time_seconds: int = 0
    max_validators: int = 0
    max_entries: int = 0
    historical_entries: int = 0


@runtime_checkable
class BankSource(Protocol):
    def get_balances(self, addresses: Sequence[str], height: int) -> list[AccountBalance]: ...

    def get_supply(self, height: int) -> list[Coin]: ...

    def get_account_balance(self, address: str, height: int) -> list[Coin]: ...


@runtime_checkable
class DistributionSource(Protocol):
    def validator_commission(self, val_oper_addr: str, height: int) -> list[DecCoin]: ...

    def delegator_total_rewards(
        self, delegator: str, height: int
    ) -> list[DelegationDelegatorReward]: ...

    def delegator_withdraw_address(self, delegator: str, height: int) -> str: ...

    def community_pool(self, height: int) -> list[DecCoin]: ...

    def params(self, height: int) -> Any: ...


@runtime_checkable
class StakingSource(Protocol):
    def get_delegations_with_pagination(
        self, height: int, delegator: str, pagination: Any
    ) -> DelegationsPage: ...

    def get_validator_delegations_with_pagination(
        self, height: int, validator: str, pagination: Any
    ) -> DelegationsPage: ...

    def get_unbonding_delegations(
        self, height: int, delegator: str, pagination: Any
    ) -> UnbondingDelegationsPage: ...

    def get_unbonding_delegations_from_validator(
        self, height: int, validator: str, pagination: Any
    ) -> UnbondingDelegationsPage: ...

    def get_redelegations(self, height: int, request: RedelegationsRequest) -> RedelegationsPage: ...

    def get_params(self, height: int) -> StakingParams: ...