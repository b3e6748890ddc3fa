"""Storage of indexed blockchain staking data: coins, row types and an SQLite database."""

__version__ = "0.1.0"