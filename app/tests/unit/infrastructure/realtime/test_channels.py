"""Unit tests for channel-name parsing and builders."""

import pytest

from infrastructure.realtime import (
    DirectConversation,
    Presence,
    Topic,
    Unrecognized,
    UserPrivate,
    dm_channel_name,
    parse_channel,
    presence_channel_name,
    topic_channel_name,
    user_channel_name,
)


@pytest.mark.unit
class TestParseChannel:
    def test_direct_conversation(self):
        channel = parse_channel("dm:alice:bob")
        assert channel == DirectConversation(low="alice", high="bob")
        assert channel.participants == frozenset({"alice", "bob"})

    def test_user_private(self):
        assert parse_channel("user:alice") == UserPrivate(user_id="alice")

    def test_presence_accepts_any_suffix(self):
        assert parse_channel("presence:room:42") == Presence(topic="room:42")

    def test_topic(self):
        assert parse_channel("topic:rust") == Topic(topic_id="rust")

    @pytest.mark.parametrize(
        "name",
        [
            "",
            "dm",
            "dm:",
            "dm:alice",
            "dm:bob:alice",
            "dm:alice:alice",
            "dm::bob",
            "dm:alice:",
            "dm:alice:bob:carol",
            "user:",
            "user:a:b",
            "presence:",
            "topic:",
            "private-chat-alice",
            "room:general",
        ],
    )
    def test_malformed_names_are_unrecognized(self, name):
        assert isinstance(parse_channel(name), Unrecognized)

    def test_non_string_is_unrecognized(self):
        assert isinstance(parse_channel(None), Unrecognized)  # type: ignore[arg-type]

    def test_other_participant(self):
        channel = DirectConversation(low="alice", high="bob")
        assert channel.other_participant("alice") == "bob"
        assert channel.other_participant("bob") == "alice"
        with pytest.raises(ValueError):
            channel.other_participant("eve")


@pytest.mark.unit
class TestChannelBuilders:
    @pytest.mark.parametrize(
        "a,b", [("alice", "bob"), ("bob", "alice"), ("u-10", "u-9"), ("Zed", "amy")]
    )
    def test_dm_name_is_canonical(self, a, b):
        assert dm_channel_name(a, b) == dm_channel_name(b, a)
        parsed = parse_channel(dm_channel_name(a, b))
        assert isinstance(parsed, DirectConversation)
        assert parsed.participants == frozenset({a, b})

    def test_dm_name_orders_lexicographically(self):
        assert dm_channel_name("bob", "alice") == "dm:alice:bob"

    @pytest.mark.parametrize("a,b", [("alice", "alice"), ("", "bob"), ("a:b", "c")])
    def test_dm_name_rejects_bad_ids(self, a, b):
        with pytest.raises(ValueError):
            dm_channel_name(a, b)

    def test_other_builders_round_trip(self):
        assert parse_channel(user_channel_name("alice")) == UserPrivate("alice")
        assert parse_channel(presence_channel_name("lobby")) == Presence("lobby")
        assert parse_channel(topic_channel_name("rust")) == Topic("rust")

    @pytest.mark.parametrize(
        "builder", [user_channel_name, topic_channel_name, presence_channel_name]
    )
    def test_builders_reject_empty(self, builder):
        with pytest.raises(ValueError):
            builder("")
