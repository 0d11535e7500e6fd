"""Tests for inbound websocket frame parsing."""

import pytest

from fitpulse.interfaces.api.schemas import ClientMessage


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        ("n1", "n1"),
        (" n1 ", "n1"),
        (12, "12"),
        ("", None),
        (None, None),
        (True, None),
        ({"id": "n1"}, None),
    ],
)
def test_data_as_id(data, expected):
    assert ClientMessage(type="markNotificationRead", data=data).data_as_id() == expected


def test_extra_fields_are_ignored():
    message = ClientMessage.model_validate({"type": "typing", "room": "u1"})

    assert message.type == "typing"
    assert message.data is None
