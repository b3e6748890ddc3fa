import pytest

from chaindex.actions.payload import Context, PageRequest, Payload, PayloadArgs


class Node:
    def __init__(self, height=None):
        self.height = height

    def latest_height(self):
        if self.height is None:
            raise ConnectionError("down")
        return self.height


def test_from_dict_reads_input():
    payload = Payload.from_dict(
        {"session_variables": {"x-hasura-role": "admin"},
         "input": {"address": "addr1", "height": 12, "offset": 2, "limit": 5, "count_total": True}}
    )
    assert payload.address() == "addr1"
    assert payload.input == PayloadArgs("addr1", 12, 2, 5, True)
    assert payload.pagination() == PageRequest(offset=2, limit=5, count_total=True)
    assert payload.session_variables == {"x-hasura-role": "admin"}


def test_from_dict_none_and_empty():
    assert Payload.from_dict(None) == Payload()
    assert Payload.from_dict({}).input == PayloadArgs()


@pytest.mark.parametrize("data", [
    [1], {"input": {"height": "1"}}, {"input": {"offset": -1}},
    {"input": {"height": 1.5}}, {"input": {"address": 3}}, {"input": []},
])
def test_from_dict_rejects_bad_types(data):
    with pytest.raises(ValueError):
        Payload.from_dict(data)


def test_get_height_uses_payload_height():
    ctx = Context(node=Node(99), sources=None)
    assert ctx.get_height(Payload(input=PayloadArgs(height=7))) == 7


def test_get_height_falls_back_to_latest():
    ctx = Context(node=Node(99), sources=None)
    assert ctx.get_height(None) == 99
    assert ctx.get_height(Payload()) == 99


def test_get_height_node_error():
    ctx = Context(node=Node(None), sources=None)
    with pytest.raises(RuntimeError, match="latest block height"):
        ctx.get_height(None)