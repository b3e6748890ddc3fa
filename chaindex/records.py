"""Records handed to the database when storing validator data."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional

from chaindex.coins import Dec

DO_NOT_MODIFY_DESC = "[do-not-modify]"

MAX_MONIKER_LENGTH = 70
MAX_IDENTITY_LENGTH = 3000
MAX_WEBSITE_LENGTH = 140
MAX_SECURITY_CONTACT_LENGTH = 140
MAX_DETAILS_LENGTH = 280

_LIMITS = (
    ("moniker", "moniker", MAX_MONIKER_LENGTH),
    ("identity", "identity", MAX_IDENTITY_LENGTH),
    ("website", "website", MAX_WEBSITE_LENGTH),
    ("security_contact", "security contact", MAX_SECURITY_CONTACT_LENGTH),
    ("details", "details", MAX_DETAILS_LENGTH),
)


@dataclass(frozen=True)
class Validator:
    """A validator as read from the chain."""

    consensus_address: str
    consensus_pubkey: str
    operator_address: str
    self_delegate_address: str
    max_change_rate: Dec
    max_rate: Dec
    height: int


@dataclass(frozen=True)
class Description:
    """The public description of a validator."""

    moniker: str = ""
    identity: str = ""
    website: str = ""
    security_contact: str = ""
    details: str = ""

    def ensure_length(self) -> "Description":
        """Return this description, or raise ValueError if a field is too long."""
        for name, label, limit in _LIMITS:
            length = len(getattr(self, name).encode())
            if length > limit:
                raise ValueError(f"invalid {label} length; got: {length}, max: {limit}")
        return self

    def update(self, other: "Description") -> "Description":
        """Apply ``other`` on top of this description.

        Fields of ``other`` set to the do-not-modify marker keep their current value.
        """
        values = {}
        for item in fields(self):
            theirs = getattr(other, item.name)
            values[item.name] = (
                getattr(self, item.name) if theirs == DO_NOT_MODIFY_DESC else theirs
            )
        return Description(**values).ensure_length()


@dataclass(frozen=True)
class ValidatorDescription:
    """A validator description observed at a given height."""

    operator_address: str
    description: Description
    avatar_url: str
    height: int


@dataclass(frozen=True)
class ValidatorCommission:
    """A validator commission update; ``None`` fields are left unchanged."""

    validator_address: str
    commission: Optional[Dec]
    min_self_delegation: Optional[int]
    height: int


@dataclass(frozen=True)
class ValidatorVotingPower:
    """The voting power of a validator at a given height."""

    consensus_address: str
    voting_power: int
    height: int


@dataclass(frozen=True)
class ValidatorStatus:
    """The status and jail state of a validator at a given height."""

    consensus_address: str
    consensus_pubkey: str
    status: int
    jailed: bool
    height: int


@dataclass(frozen=True)
class DoubleSignVote:
    """One of the two conflicting votes of a double sign."""

    type: int
    height: int
    round: int
    block_id: str
    validator_address: str
    validator_index: int
    signature: str


@dataclass(frozen=True)
class DoubleSignEvidence:
    """Evidence of a validator signing two conflicting votes."""

    height: int
    vote_a: DoubleSignVote
    vote_b: DoubleSignVote