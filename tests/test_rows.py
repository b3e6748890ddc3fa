from datetime import datetime, timedelta, timezone

from chaindex.coins import Coin, DbCoins, DbDecCoins, Dec, DecCoin
from chaindex.rows import (
    AccountRow,
    AverageTimeRow,
    BlockRow,
    CommunityPoolRow,
    ConsensusRow,
    GenesisRow,
    InflationRow,
    MintParamsRow,
    ModuleRow,
    ModuleRows,
    SoftwareUpgradePlanRow,
    StakingPoolRow,
    SupplyRow,
    TokenPriceRow,
    TokenUnitRow,
)

MODULES = ["auth", "bank", "consensus", "distribution", "gov", "mint", "pricefeed", "staking", "supply"]


def test_account_row_equality():
    assert AccountRow("cosmos1z4hfrxvlgl4s8u4n5ngjcw8kdqrcv43599amxs") == AccountRow(
        "cosmos1z4hfrxvlgl4s8u4n5ngjcw8kdqrcv43599amxs"
    )
    assert not (AccountRow("a1") == AccountRow("a2"))


def test_genesis_row_defaults_and_time_equality():
    utc = datetime(2021, 1, 1, 12, 0, tzinfo=timezone.utc)
    shifted = utc.astimezone(timezone(timedelta(hours=2)))
    row = GenesisRow("chain", utc, 1)
    assert row.one_row_id is True
    assert row == GenesisRow("chain", shifted, 1, one_row_id=False)
    assert not (row == GenesisRow("chain", utc, 2))


def test_consensus_row_equality():
    row = ConsensusRow(10, 1, "RoundStepPropose")
    assert row.one_row_id is True
    assert row == ConsensusRow(10, 1, "RoundStepPropose")
    assert not (row == ConsensusRow(10, 2, "RoundStepPropose"))


def test_average_time_and_inflation_rows():
    assert AverageTimeRow(5.5, 10) == AverageTimeRow(5.5, 10)
    assert not (AverageTimeRow(5.5, 10) == AverageTimeRow(5.5, 11))
    assert InflationRow(0.1, 3) == InflationRow(0.1, 3, one_row_id=False)
    assert not (InflationRow(0.1, 3) == InflationRow(0.2, 3))


def test_mint_params_row_equality():
    assert MintParamsRow('{"a":1}', 2) == MintParamsRow('{"a":1}', 2)
    assert not (MintParamsRow('{"a":1}', 2) == MintParamsRow('{"a":2}', 2))


def test_community_pool_row_compares_coins():
    coins = DbDecCoins.from_dec_coins([DecCoin("uatom", Dec.from_int(3))])
    row = CommunityPoolRow(coins, 10)
    assert row == CommunityPoolRow(DbDecCoins.parse(b'{"(uatom,3.000000000000000000)"}'), 10)
    assert not (row == CommunityPoolRow(DbDecCoins(), 10))


def test_supply_row_compares_coins_and_height():
    coins = DbCoins.from_coins([Coin("uatom", 100), Coin("stake", 5)])
    row = SupplyRow(coins, 10)
    assert row == SupplyRow(DbCoins.parse(b'{"(uatom,100)","(stake,5)"}'), 10)
    assert not (row == SupplyRow(coins, 11))


def test_staking_pool_row_equality():
    row = StakingPoolRow(100, 50, 10, 5, 7)
    assert row.one_row_id is True
    assert row == StakingPoolRow(100, 50, 10, 5, 7)
    assert not (row == StakingPoolRow(100, 50, 10, 6, 7))


def test_token_price_row_ignores_id():
    ts = datetime(2021, 1, 1, tzinfo=timezone.utc)
    assert TokenPriceRow("atom", 1.5, 1000, ts, id="x") == TokenPriceRow("atom", 1.5, 1000, ts)
    assert not (TokenPriceRow("atom", 1.5, 1000, ts) == TokenPriceRow("atom", 2.5, 1000, ts))


def test_token_unit_row_defaults():
    row = TokenUnitRow("atom", "uatom", 6)
    assert row.aliases == ()
    assert row.price_id is None


def test_block_row_with_null_proposer():
    ts = datetime(2021, 1, 1, tzinfo=timezone.utc)
    row = BlockRow(1, "HASH", 0, 0, None, 1, ts)
    assert row.proposer_address is None
    assert row == BlockRow(1, "HASH", 0, 0, None, 1, ts)


def test_software_upgrade_plan_row():
    row = SoftwareUpgradePlanRow(1, "v2", 100, "info", 50)
    assert row.upgrade_height == 100
    assert not (row == SoftwareUpgradePlanRow(1, "v2", 101, "info", 50))


def test_module_rows_from_names():
    rows = ModuleRows.from_names(MODULES)
    assert len(rows) == len(MODULES)
    assert [row.module for row in rows] == MODULES
    assert rows[0] == ModuleRow("auth")
    assert rows == ModuleRows.from_names(list(MODULES))


def test_module_rows_inequality():
    rows = ModuleRows.from_names(MODULES)
    assert not (rows == ModuleRows.from_names(list(reversed(MODULES))))
    assert not (rows == ModuleRows.from_names(MODULES[:-1]))
    assert not (rows == None)  # noqa: E711
    assert len(ModuleRows.from_names([])) == 0