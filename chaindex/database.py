"""Storage of validator data inside an SQLite database."""

from __future__ import annotations

import os
import sqlite3
from typing import Any, Iterable, Optional, Union

from chaindex.coins import to_null_string, to_string
from chaindex.records import (
    DO_NOT_MODIFY_DESC,
    Description,
    DoubleSignEvidence,
    DoubleSignVote,
    Validator,
    ValidatorCommission,
    ValidatorDescription,
    ValidatorStatus,
    ValidatorVotingPower,
)
from chaindex.validator_rows import ValidatorCommissionRow, ValidatorData

_SCHEMA = """
CREATE TABLE IF NOT EXISTS account (
    address TEXT NOT NULL PRIMARY KEY
);
CREATE TABLE IF NOT EXISTS validator (
    consensus_address TEXT NOT NULL PRIMARY KEY,
    consensus_pubkey  TEXT NOT NULL UNIQUE
);
CREATE TABLE IF NOT EXISTS validator_info (
    consensus_address     TEXT NOT NULL PRIMARY KEY REFERENCES validator (consensus_address),
    operator_address      TEXT NOT NULL UNIQUE,
    self_delegate_address TEXT REFERENCES account (address),
    max_change_rate       TEXT NOT NULL,
    max_rate              TEXT NOT NULL,
    height                BIGINT NOT NULL
);
CREATE TABLE IF NOT EXISTS validator_description (
    validator_address TEXT NOT NULL PRIMARY KEY REFERENCES validator (consensus_address),
    moniker           TEXT,
    identity          TEXT,
    avatar_url        TEXT,
    website           TEXT,
    security_contact  TEXT,
    details           TEXT,
    height            BIGINT NOT NULL
);
CREATE TABLE IF NOT EXISTS validator_commission (
    validator_address   TEXT NOT NULL PRIMARY KEY REFERENCES validator (consensus_address),
    commission          TEXT,
    min_self_delegation TEXT,
    height              BIGINT NOT NULL
);
CREATE TABLE IF NOT EXISTS validator_voting_power (
    validator_address TEXT NOT NULL PRIMARY KEY REFERENCES validator (consensus_address),
    voting_power      BIGINT NOT NULL,
    height            BIGINT NOT NULL
);
CREATE TABLE IF NOT EXISTS validator_status (
    validator_address TEXT NOT NULL PRIMARY KEY REFERENCES validator (consensus_address),
    status            INT NOT NULL,
    jailed            BOOLEAN NOT NULL,
    height            BIGINT NOT NULL
);
CREATE TABLE IF NOT EXISTS double_sign_vote (
    id                INTEGER PRIMARY KEY AUTOINCREMENT,
    type              SMALLINT NOT NULL,
    height            BIGINT NOT NULL,
    round             INT NOT NULL,
    block_id          TEXT NOT NULL,
    validator_address TEXT NOT NULL REFERENCES validator (consensus_address),
    validator_index   INT NOT NULL,
    signature         TEXT NOT NULL,
    UNIQUE (block_id, validator_address)
);
CREATE TABLE IF NOT EXISTS double_sign_evidence (
    height    BIGINT NOT NULL,
    vote_a_id BIGINT NOT NULL REFERENCES double_sign_vote (id),
    vote_b_id BIGINT NOT NULL REFERENCES double_sign_vote (id),
    UNIQUE (vote_a_id, vote_b_id)
);
CREATE TABLE IF NOT EXISTS modules (
    module_name TEXT NOT NULL PRIMARY KEY
);
"""

_VALIDATOR_DATA_QUERY = """
SELECT validator.consensus_address,
       validator.consensus_pubkey,
       validator_info.operator_address,
       validator_info.max_change_rate,
       validator_info.max_rate,
       validator_info.self_delegate_address
FROM validator INNER JOIN validator_info
    ON validator.consensus_address = validator_info.consensus_address
WHERE validator_info.{column} = ?"""

AnyValidator = Union[Validator, ValidatorData]


class DatabaseError(Exception):
    """Raised when a database operation fails."""


class NotFoundError(DatabaseError, LookupError):
    """Raised when the requested data is not stored."""


def _placeholders(rows: int, width: int) -> str:
    group = "(" + ",".join("?" * width) + ")"
    return ",".join([group] * rows)


def _rates(validator: AnyValidator) -> tuple[str, str]:
    """Return the (max change rate, max rate) pair as stored text."""
    if isinstance(validator, ValidatorData):
        return str(validator.parsed_max_change_rate()), str(validator.parsed_max_rate())
    return str(validator.max_change_rate), str(validator.max_rate)


class Database:
    """A database holding indexed validator data."""

    def __init__(self, path: Union[str, os.PathLike] = ":memory:") -> None:
        self._conn = sqlite3.connect(os.fspath(path), isolation_level=None)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON")
        self._conn.executescript(_SCHEMA)

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -- raw access --------------------------------------------------------------------------------

    def execute(self, statement: str, *args: Any) -> int:
        """Run a statement and return the number of rows it changed."""
        try:
            return self._conn.execute(statement, args).rowcount
        except sqlite3.Error as err:
            raise DatabaseError(str(err)) from err

    def query(self, statement: str, *args: Any) -> list[dict[str, Any]]:
        """Run a query and return its rows as dictionaries."""
        try:
            return [dict(row) for row in self._conn.execute(statement, args).fetchall()]
        except sqlite3.Error as err:
            raise DatabaseError(str(err)) from err

    def _run(self, statement: str, params: Iterable[Any], action: str) -> sqlite3.Cursor:
        try:
            return self._conn.execute(statement, tuple(params))
        except sqlite3.Error as err:
            raise DatabaseError(f"error while {action}: {err}") from err

    # -- validators --------------------------------------------------------------------------------

    def save_validator_data(self, validator: AnyValidator) -> None:
        """Store the data of a single validator."""
        self.save_validators_data([validator])

    def save_validators_data(self, validators: Iterable[AnyValidator]) -> None:
        """Store the data of many validators at once."""
        validators = list(validators)
        if not validators:
            return

        account_params: list[Any] = []
        validator_params: list[Any] = []
        info_params: list[Any] = []
        for validator in validators:
            max_change_rate, max_rate = _rates(validator)
            account_params.append(validator.self_delegate_address)
            validator_params += [validator.consensus_address, validator.consensus_pubkey]
            info_params += [
                validator.consensus_address,
                validator.operator_address,
                validator.self_delegate_address,
                max_change_rate,
                max_rate,
                validator.height,
            ]

        count = len(validators)
        self._run(
            f"INSERT INTO account (address) VALUES {_placeholders(count, 1)} ON CONFLICT DO NOTHING",
            account_params,
            "storing accounts",
        )
        self._run(
            "INSERT INTO validator (consensus_address, consensus_pubkey) "
            f"VALUES {_placeholders(count, 2)} ON CONFLICT DO NOTHING",
            validator_params,
            "storing validators",
        )
        self._run(
            "INSERT INTO validator_info (consensus_address, operator_address, self_delegate_address, "
            f"max_change_rate, max_rate, height) VALUES {_placeholders(count, 6)}\n"
            """ON CONFLICT (consensus_address) DO UPDATE
    SET consensus_address = excluded.consensus_address,
        operator_address = excluded.operator_address,
        self_delegate_address = excluded.self_delegate_address,
        max_change_rate = excluded.max_change_rate,
        max_rate = excluded.max_rate,
        height = excluded.height
WHERE validator_info.height <= excluded.height""",
            info_params,
            "storing validator infos",
        )

    def get_validator_consensus_address(self, address: str) -> str:
        """Return the consensus address of the validator with the given operator address."""
        rows = self.query(
            "SELECT consensus_address FROM validator_info WHERE operator_address = ?", address
        )
        if not rows:
            raise NotFoundError(
                f"cannot find the consensus address of validator having operator address {address}"
            )
        return rows[0]["consensus_address"]

    def get_validator_operator_address(self, cons_addr: str) -> str:
        """Return the operator address of the validator with the given consensus address."""
        rows = self.query(
            "SELECT operator_address FROM validator_info WHERE consensus_address = ?", cons_addr
        )
        if not rows:
            raise NotFoundError(
                f"cannot find the operator address of validator having consensus address {cons_addr}"
            )
        return rows[0]["operator_address"]

    def _find_validator(self, column: str, value: str) -> Optional[ValidatorData]:
        rows = self.query(_VALIDATOR_DATA_QUERY.format(column=column), value)
        if not rows:
            return None
        row = rows[0]
        # The lookup does not read the height, which is left at zero.
        return ValidatorData(
            consensus_address=row["consensus_address"],
            operator_address=row["operator_address"],
            consensus_pubkey=row["consensus_pubkey"],
            self_delegate_address=row["self_delegate_address"],
            max_rate=row["max_rate"],
            max_change_rate=row["max_change_rate"],
            height=0,
        )

    def get_validator(self, val_address: str) -> ValidatorData:
        """Return the validator having the given operator address."""
        validator = self._find_validator("operator_address", val_address)
        if validator is None:
            raise NotFoundError(f"no validator with validator address {val_address} could be found")
        return validator

    def get_validators(self) -> list[ValidatorData]:
        """Return every stored validator, ordered by consensus address."""
        rows = self.query(
            """
SELECT validator.consensus_address,
       validator.consensus_pubkey,
       validator_info.operator_address,
       validator_info.self_delegate_address,
       validator_info.max_rate,
       validator_info.max_change_rate,
       validator_info.height
FROM validator
INNER JOIN validator_info
    ON validator.consensus_address = validator_info.consensus_address
ORDER BY validator.consensus_address"""
        )
        return [ValidatorData(**row) for row in rows]

    def get_validator_by_self_delegate_address(self, address: str) -> ValidatorData:
        """Return the validator having the given self delegate address."""
        validator = self._find_validator("self_delegate_address", address)
        if validator is None:
            raise NotFoundError(f"no validator with self delegate address {address} could be found")
        return validator

    # -- descriptions ------------------------------------------------------------------------------

    def save_validator_description(self, description: ValidatorDescription) -> None:
        """Store a validator description, merging it with the stored one."""
        cons_addr = self.get_validator_consensus_address(description.operator_address)
        des = description.description.ensure_length()

        avatar_url = description.avatar_url
        existing = self._get_validator_description(cons_addr)
        if existing is not None:
            des = existing.description.update(des)
            if description.avatar_url == DO_NOT_MODIFY_DESC:
                avatar_url = existing.avatar_url

        self._run(
            """
INSERT INTO validator_description (
    validator_address, moniker, identity, avatar_url, website, security_contact, details, height
)
VALUES (?, ?, ?, ?, ?, ?, ?, ?)
ON CONFLICT (validator_address) DO UPDATE
    SET moniker = excluded.moniker,
        identity = excluded.identity,
        avatar_url = excluded.avatar_url,
        website = excluded.website,
        security_contact = excluded.security_contact,
        details = excluded.details,
        height = excluded.height
WHERE validator_description.height <= excluded.height""",
            (
                to_null_string(cons_addr),
                to_null_string(des.moniker),
                to_null_string(des.identity),
                to_null_string(avatar_url),
                to_null_string(des.website),
                to_null_string(des.security_contact),
                to_null_string(des.details),
                description.height,
            ),
            "storing validator description",
        )

    def _get_validator_description(self, address: str) -> Optional[ValidatorDescription]:
        try:
            rows = self.query(
                "SELECT * FROM validator_description WHERE validator_address = ?", address
            )
        except DatabaseError:
            return None
        if not rows:
            return None
        row = rows[0]
        return ValidatorDescription(
            operator_address=row["validator_address"],
            description=Description(
                moniker=to_string(row["moniker"]),
                identity=to_string(row["identity"]),
                website=to_string(row["website"]),
                security_contact=to_string(row["security_contact"]),
                details=to_string(row["details"]),
            ),
            avatar_url=to_string(row["avatar_url"]),
            height=row["height"],
        )

    # -- commissions -------------------------------------------------------------------------------

    def save_validator_commission(self, data: ValidatorCommission) -> None:
        """Store a validator commission, keeping stored values for unset fields."""
        if data.commission is None and data.min_self_delegation is None:
            return

        cons_addr = self.get_validator_consensus_address(data.validator_address)

        commission = ""
        min_self_delegation = ""
        existing = self._get_validator_commission(cons_addr)
        if existing is not None:
            commission = existing.commission or commission
            min_self_delegation = existing.min_self_delegation or min_self_delegation

        if data.commission is not None:
            commission = str(data.commission)
        if data.min_self_delegation is not None:
            min_self_delegation = str(data.min_self_delegation)

        self._run(
            """
INSERT INTO validator_commission (validator_address, commission, min_self_delegation, height)
VALUES (?, ?, ?, ?)
ON CONFLICT (validator_address) DO UPDATE
    SET commission = excluded.commission,
        min_self_delegation = excluded.min_self_delegation,
        height = excluded.height
WHERE validator_commission.height <= excluded.height""",
            (cons_addr, commission, min_self_delegation, data.height),
            "storing validator commission",
        )

    def _get_validator_commission(self, address: str) -> Optional[ValidatorCommissionRow]:
        try:
            rows = self.query(
                "SELECT * FROM validator_commission WHERE validator_address = ?", address
            )
        except DatabaseError:
            return None
        return ValidatorCommissionRow(**rows[0]) if rows else None

    # -- voting powers and statuses ----------------------------------------------------------------

    def save_validators_voting_powers(self, entries: Iterable[ValidatorVotingPower]) -> None:
        """Store the given validator voting powers."""
        entries = list(entries)
        if not entries:
            return
        params: list[Any] = []
        for entry in entries:
            params += [entry.consensus_address, entry.voting_power, entry.height]
        self._run(
            "INSERT INTO validator_voting_power (validator_address, voting_power, height) "
            f"VALUES {_placeholders(len(entries), 3)}\n"
            """ON CONFLICT (validator_address) DO UPDATE
    SET voting_power = excluded.voting_power,
        height = excluded.height
WHERE validator_voting_power.height <= excluded.height""",
            params,
            "storing validators voting power",
        )

    def save_validators_statuses(self, statuses: Iterable[ValidatorStatus]) -> None:
        """Store the given validator statuses and jail states."""
        statuses = list(statuses)
        if not statuses:
            return
        validator_params: list[Any] = []
        status_params: list[Any] = []
        for status in statuses:
            validator_params += [status.consensus_address, status.consensus_pubkey]
            status_params += [status.consensus_address, status.status, status.jailed, status.height]

        self._run(
            "INSERT INTO validator (consensus_address, consensus_pubkey) "
            f"VALUES {_placeholders(len(statuses), 2)} ON CONFLICT DO NOTHING",
            validator_params,
            "storing validators",
        )
        self._run(
            "INSERT INTO validator_status (validator_address, status, jailed, height) "
            f"VALUES {_placeholders(len(statuses), 4)}\n"
            """ON CONFLICT (validator_address) DO UPDATE
    SET status = excluded.status,
        jailed = excluded.jailed,
        height = excluded.height
WHERE validator_status.height <= excluded.height""",
            status_params,
            "storing validators statuses",
        )

    # -- double sign evidence ----------------------------------------------------------------------

    def _save_double_sign_vote(self, vote: DoubleSignVote) -> int:
        cursor = self._run(
            """
INSERT INTO double_sign_vote
    (type, height, round, block_id, validator_address, validator_index, signature)
VALUES (?, ?, ?, ?, ?, ?, ?) ON CONFLICT DO NOTHING""",
            (
                vote.type,
                vote.height,
                vote.round,
                vote.block_id,
                vote.validator_address,
                vote.validator_index,
                vote.signature,
            ),
            "storing double sign vote",
        )
        if cursor.rowcount == 0:
            raise DatabaseError("error while storing double sign vote: vote already stored")
        return cursor.lastrowid

    def save_double_sign_evidence(self, evidence: DoubleSignEvidence) -> None:
        """Store both votes of the evidence and the evidence itself."""
        vote_a = self._save_double_sign_vote(evidence.vote_a)
        vote_b = self._save_double_sign_vote(evidence.vote_b)
        self._run(
            "INSERT INTO double_sign_evidence (height, vote_a_id, vote_b_id) "
            "VALUES (?, ?, ?) ON CONFLICT DO NOTHING",
            (evidence.height, vote_a, vote_b),
            "storing double sign evidence",
        )

    # -- modules -----------------------------------------------------------------------------------

    def insert_enable_modules(self, modules: Iterable[str]) -> None:
        """Replace the stored list of enabled modules."""
        modules = list(modules)
        if not modules:
            return
        self._run("DELETE FROM modules WHERE TRUE", (), "deleting modules")
        self._run(
            f"INSERT INTO modules (module_name) VALUES {_placeholders(len(modules), 1)} "
            "ON CONFLICT DO NOTHING",
            modules,
            "storing modules",
        )