"""Rows of the validator-related database tables."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from chaindex.coins import Dec, to_null_string

_INT_RE = re.compile(r"[+-]?\d+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _parse_int64(text: str) -> int:
    if not isinstance(text, str) or _INT_RE.fullmatch(text) is None:
        raise ValueError(f"invalid integer: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


@dataclass(frozen=True)
class ValidatorData:
    """All the stored data of a single validator."""

    consensus_address: str
    operator_address: str
    consensus_pubkey: str
    self_delegate_address: str
    max_rate: str
    max_change_rate: str
    height: int

    def parsed_max_rate(self) -> Dec:
        """Return the maximum commission rate as a decimal."""
        return Dec.from_int(_parse_int64(self.max_rate))

    def parsed_max_change_rate(self) -> Dec:
        """Return the maximum commission change rate as a decimal."""
        return Dec.from_int(_parse_int64(self.max_change_rate))


@dataclass(frozen=True)
class ValidatorRow:
    """A row of the validator table."""

    consensus_address: str
    consensus_pubkey: str


@dataclass(frozen=True)
class ValidatorInfoRow:
    """A row of the validator_info table."""

    consensus_address: str
    operator_address: str
    self_delegate_address: str
    max_rate: str
    max_change_rate: str
    height: int


@dataclass(frozen=True)
class ValidatorDescriptionRow:
    """A row of the validator_description table.

    The avatar URL is stored but does not take part in equality.
    """

    validator_address: str
    moniker: Optional[str]
    identity: Optional[str]
    avatar_url: Optional[str] = field(compare=False)
    website: Optional[str]
    security_contact: Optional[str]
    details: Optional[str]
    height: int

    @classmethod
    def build(
        cls,
        validator_address: str,
        moniker: str,
        identity: str,
        avatar_url: str,
        website: str,
        security_contact: str,
        details: str,
        height: int,
    ) -> "ValidatorDescriptionRow":
        """Build a row, storing blank texts as NULL."""
        return cls(
            validator_address=validator_address,
            moniker=to_null_string(moniker),
            identity=to_null_string(identity),
            avatar_url=to_null_string(avatar_url),
            website=to_null_string(website),
            security_contact=to_null_string(security_contact),
            details=to_null_string(details),
            height=height,
        )


@dataclass(frozen=True)
class ValidatorCommissionRow:
    """A row of the validator_commission table."""

    validator_address: str
    commission: Optional[str]
    min_self_delegation: Optional[str]
    height: int

    @classmethod
    def build(
        cls,
        validator_address: str,
        commission: str,
        min_self_delegation: str,
        height: int,
    ) -> "ValidatorCommissionRow":
        """Build a row, storing blank texts as NULL."""
        return cls(
            validator_address=validator_address,
            commission=to_null_string(commission),
            min_self_delegation=to_null_string(min_self_delegation),
            height=height,
        )


@dataclass(frozen=True)
class ValidatorVotingPowerRow:
    """A row of the validator_voting_power table."""

    validator_address: str
    voting_power: int
    height: int


@dataclass(frozen=True)
class ValidatorStatusRow:
    """A row of the validator_status table."""

    status: int
    jailed: bool
    validator_address: str
    height: int


@dataclass(frozen=True)
class DoubleSignVoteRow:
    """A row of the double_sign_vote table."""

    id: int
    vote_type: int
    height: int
    round: int
    block_id: str
    validator_address: str
    validator_index: int
    signature: str


@dataclass(frozen=True)
class DoubleSignEvidenceRow:
    """A row of the double_sign_evidence table."""

    height: int
    vote_a_id: int
    vote_b_id: int