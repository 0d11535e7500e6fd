"""Tests for the in-memory presence registry."""

from fitpulse.infrastructure.notifications import PresenceRegistry


def test_register_marks_user_online(make_connection):
    registry = PresenceRegistry()
    connection = make_connection("u1")

    registry.register("u1", connection)

    assert registry.is_online("u1")
    assert registry.user_for(connection) == "u1"
    assert registry.connections_for("u1") == frozenset({connection})
    assert len(registry) == 1


def test_multiple_sessions_per_user_are_tracked(make_connection):
    registry = PresenceRegistry()
    phone, laptop = make_connection("u1"), make_connection("u1")

    registry.register("u1", phone)
    registry.register("u1", laptop)
    registry.unregister(phone)

    assert registry.is_online("u1")
    assert registry.connections_for("u1") == frozenset({laptop})


def test_unregister_last_connection_marks_user_offline(make_connection):
    registry = PresenceRegistry()
    connection = make_connection("u1")
    registry.register("u1", connection)

    assert registry.unregister(connection) == "u1"
    assert not registry.is_online("u1")
    assert registry.user_for(connection) is None
    assert registry.connections_for("u1") == frozenset()


def test_unregister_unknown_connection_is_noop(make_connection):
    registry = PresenceRegistry()
    registry.register("u1", make_connection("u1"))

    assert registry.unregister(make_connection("u2")) is None
    assert registry.is_online("u1")


def test_reregistering_moves_connection_to_new_user(make_connection):
    registry = PresenceRegistry()
    connection = make_connection("u1")

    registry.register("u1", connection)
    registry.register("u2", connection)

    assert not registry.is_online("u1")
    assert registry.user_for(connection) == "u2"
