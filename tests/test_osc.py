import socket

import pytest

from deathrelay.osc import encode_message, send_message


def test_int_message_wire_bytes():
    assert encode_message("/a", [1]) == b"/a\x00\x00,i\x00\x00\x00\x00\x00\x01"


def test_bool_message_has_no_payload():
    assert encode_message("/a", [True]) == b"/a\x00\x00,T\x00\x00"


def test_false_uses_f_tag():
    assert encode_message("/a", [False])[4:8] == b",F\x00\x00"


@pytest.mark.parametrize(
    "args",
    [[], [1, 2], ["abc"], ["abcd"], [1.5], [b"xyz"], [None, True, 7]],
)
def test_encoded_length_is_multiple_of_four(args):
    assert len(encode_message("/avatar/parameters/ToN_DeathID", args)) % 4 == 0


def test_address_is_null_terminated_and_padded():
    data = encode_message("/abcd", [])
    assert data[:8] == b"/abcd\x00\x00\x00"


def test_int_out_of_range_raises():
    with pytest.raises(ValueError):
        encode_message("/a", [2**31])


def test_unsupported_type_raises():
    with pytest.raises(TypeError):
        encode_message("/a", [object()])


def test_send_message_round_trip():
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as receiver:
        receiver.bind(("127.0.0.1", 0))
        receiver.settimeout(5)
        port = receiver.getsockname()[1]
        assert send_message("/avatar/parameters/ToN_DeathID", [3], "127.0.0.1", port)
        data, _ = receiver.recvfrom(1024)
    assert data == encode_message("/avatar/parameters/ToN_DeathID", [3])


def test_send_message_reports_encoding_failure():
    assert send_message("/a", [2**40], "127.0.0.1", 9) is False