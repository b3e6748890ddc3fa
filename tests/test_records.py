import pytest

from chaindex.records import (
    DO_NOT_MODIFY_DESC,
    MAX_DETAILS_LENGTH,
    MAX_IDENTITY_LENGTH,
    MAX_MONIKER_LENGTH,
    MAX_SECURITY_CONTACT_LENGTH,
    MAX_WEBSITE_LENGTH,
    Description,
)

LIMITS = [
    ("moniker", MAX_MONIKER_LENGTH, "moniker"),
    ("identity", MAX_IDENTITY_LENGTH, "identity"),
    ("website", MAX_WEBSITE_LENGTH, "website"),
    ("security_contact", MAX_SECURITY_CONTACT_LENGTH, "security contact"),
    ("details", MAX_DETAILS_LENGTH, "details"),
]


@pytest.mark.parametrize("name,limit,label", LIMITS)
def test_ensure_length_accepts_field_at_limit(name, limit, label):
    description = Description(**{name: "x" * limit})
    assert description.ensure_length() == description


@pytest.mark.parametrize("name,limit,label", LIMITS)
def test_ensure_length_rejects_long_field(name, limit, label):
    description = Description(**{name: "x" * (limit + 1)})
    with pytest.raises(ValueError, match=f"invalid {label} length"):
        description.ensure_length()


def test_update_keeps_fields_marked_do_not_modify():
    current = Description("moniker", "identity", "website", "contact", "details")
    change = Description(DO_NOT_MODIFY_DESC, "new-identity", DO_NOT_MODIFY_DESC, "", DO_NOT_MODIFY_DESC)
    updated = current.update(change)
    assert updated == Description("moniker", "new-identity", "website", "", "details")


def test_update_replaces_every_plain_field():
    current = Description("moniker", "identity", "website", "contact", "details")
    change = Description("a", "b", "c", "d", "e")
    assert current.update(change) == change


def test_update_checks_lengths():
    current = Description("moniker")
    change = Description("x" * (MAX_MONIKER_LENGTH + 1))
    with pytest.raises(ValueError):
        current.update(change)