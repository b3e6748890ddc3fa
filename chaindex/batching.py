"""Splitting of bulk inserts so they fit the statement parameter limit."""

from __future__ import annotations

from typing import Sequence, TypeVar

MAX_POSTGRESQL_PARAMS = 65535

T = TypeVar("T")


def split_accounts(accounts: Sequence[T], params_number: int) -> list[list[T]]:
    """Split accounts into slices, each usable in one statement of ``params_number`` columns."""
    max_per_slice = MAX_POSTGRESQL_PARAMS // params_number
    slices: list[list[T]] = [[] for _ in range(len(accounts) // max_per_slice + 1)]

    slice_index = 0
    for index, account in enumerate(accounts):
        slices[slice_index].append(account)
        if index > 0 and index % (max_per_slice - 1) == 0:
            slice_index += 1

    return slices