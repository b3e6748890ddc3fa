from dataclasses import replace

import pytest

from chaindex.coins import Dec
from chaindex.validator_rows import (
    DoubleSignEvidenceRow,
    DoubleSignVoteRow,
    ValidatorCommissionRow,
    ValidatorData,
    ValidatorDescriptionRow,
    ValidatorInfoRow,
    ValidatorRow,
    ValidatorStatusRow,
    ValidatorVotingPowerRow,
)

CONS = "cosmosvalcons1qqqqrezrl53hujmpdch6d805ac75n220ku09rl"
OPER = "cosmosvaloper1rcp29q3hpd246n6qak7jluqep4v006cdsc2kkl"
PUBKEY = "cosmosvalconspub1zcjduepq7mft6gfls57a0a42d7uhx656cckhfvtrlmw744jv4q0mvlv0dypskehfk8"
SELF = "cosmos1z4hfrxvlgl4s8u4n5ngjcw8kdqrcv43599amxs"


def _data(max_rate="1", max_change_rate="2"):
    return ValidatorData(CONS, OPER, PUBKEY, SELF, max_rate, max_change_rate, 1)


def test_validator_data_parses_rates():
    data = _data()
    assert data.parsed_max_rate() == Dec.from_int(1)
    assert data.parsed_max_change_rate() == Dec.from_int(2)


def test_validator_data_parsed_rate_string():
    assert str(_data(max_rate="12").parsed_max_rate()) == str(Dec.from_int(12))


@pytest.mark.parametrize("bad", ["", "0.5", "abc", "1_0", "9223372036854775808"])
def test_validator_data_rejects_invalid_rates(bad):
    with pytest.raises(ValueError):
        _data(max_rate=bad).parsed_max_rate()
    with pytest.raises(ValueError):
        _data(max_change_rate=bad).parsed_max_change_rate()


def test_validator_data_equality():
    assert _data() == _data()
    assert _data() != _data(max_rate="3")


def test_validator_row_and_info_row_equality():
    assert ValidatorRow(CONS, PUBKEY) == ValidatorRow(CONS, PUBKEY)
    info = ValidatorInfoRow(CONS, OPER, SELF, "1", "2", 1)
    assert info == ValidatorInfoRow(CONS, OPER, SELF, "1", "2", 1)
    assert info != replace(info, height=2)


def test_description_build_turns_blanks_into_null():
    row = ValidatorDescriptionRow.build(CONS, "moniker", "identity", "avatar-url", "", "securityContact", "  ", 10)
    assert row.website is None
    assert row.details is None
    assert row.moniker == "moniker"
    assert row.avatar_url == "avatar-url"


def test_description_build_trims_values():
    row = ValidatorDescriptionRow.build(CONS, "  moniker  ", "", "", "", "", "", 10)
    assert row.moniker == "moniker"


def test_description_equality_ignores_avatar():
    a = ValidatorDescriptionRow.build(CONS, "moniker", "", "new-avatar-url", "", "", "", 10)
    b = ValidatorDescriptionRow.build(CONS, "moniker", "", "lower-avatar-url", "", "", "", 10)
    assert a == b
    assert a != replace(b, identity="higher-identity")


def test_commission_build():
    row = ValidatorCommissionRow.build(CONS, "0.011000000000000000", "12", 10)
    assert row == ValidatorCommissionRow(CONS, "0.011000000000000000", "12", 10)
    empty = ValidatorCommissionRow.build(CONS, "", "", 10)
    assert (empty.commission, empty.min_self_delegation) == (None, None)


def test_voting_power_and_status_equality():
    power = ValidatorVotingPowerRow(CONS, 1000, 10)
    assert power != replace(power, voting_power=5)
    status = ValidatorStatusRow(1, False, CONS, 10)
    assert status == ValidatorStatusRow(1, False, CONS, 10)
    assert status != replace(status, jailed=True)


def test_double_sign_rows():
    vote = DoubleSignVoteRow(
        1, 1, 10, 1,
        "A42C9492F5DE01BFA6117137102C3EF909F1A46C2F56915F542D12AC2D0A5BCA",
        CONS, 1,
        "1qwPQjPrc7DH7+f6YAE3fOkq6phDAJ60dEyhmcZ7dx2ZgGvi9DbVLsn4leYqRNA/63ZeeH5kVly8zI1jCh4iBg==",
    )
    assert vote == replace(vote)
    assert vote != replace(vote, id=2)
    evidence = DoubleSignEvidenceRow(10, 1, 2)
    assert evidence == DoubleSignEvidenceRow(10, 1, 2)
    assert evidence != DoubleSignEvidenceRow(10, 2, 1)