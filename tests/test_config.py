import pytest

from chaindex.actions.config import ActionsConfig, default_config, parse_config


def test_default_config():
    cfg = default_config()
    assert cfg.port == 3000
    assert cfg.node is None


def test_parse_config_reads_section():
    cfg = parse_config(b"actions:\n  port: 3000\n  node:\n    rpc:\n      address: http://localhost:26657\n")
    assert cfg.port == 3000
    assert cfg.node["rpc"]["address"] == "http://localhost:26657"


def test_parse_config_without_section_is_none():
    assert parse_config("database:\n  name: x\n") is None
    assert parse_config("") is None


def test_parse_config_missing_port_is_zero():
    cfg = parse_config("actions:\n  node: null\n")
    assert cfg == ActionsConfig(port=0, node=None)


@pytest.mark.parametrize("text", ["actions:\n  port: -1\n", "actions: [1]\n", "actions: {port: [\n"])
def test_parse_config_errors(text):
    with pytest.raises(ValueError):
        parse_config(text)