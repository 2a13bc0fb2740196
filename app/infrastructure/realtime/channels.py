"""Channel-name parsing and construction.

A channel name is classified once into a closed set of descriptors:

    dm:<lowerId>:<higherId>  -> DirectConversation
    user:<id>                -> UserPrivate
    presence:<anything>      -> Presence
    topic:<id>               -> Topic
    anything else            -> Unrecognized

Producers must build names through the builders below so that both
participants of a conversation derive the identical ``dm:`` name.
"""

from dataclasses import dataclass
from typing import FrozenSet, Union

SEPARATOR = ":"

DM_PREFIX = "dm"
USER_PREFIX = "user"
PRESENCE_PREFIX = "presence"
TOPIC_PREFIX = "topic"


@dataclass(frozen=True)
class DirectConversation:
    """Channel shared by exactly two principals; ``low < high``."""

    low: str
    high: str

    @property
    def participants(self) -> FrozenSet[str]:
        return frozenset((self.low, self.high))

    def other_participant(self, principal_id: str) -> str:
        if principal_id == self.low:
            return self.high
        if principal_id == self.high:
            return self.low
        raise ValueError(f"{principal_id} is not a participant")


@dataclass(frozen=True)
class UserPrivate:
    user_id: str

    @property
    def participants(self) -> FrozenSet[str]:
        return frozenset((self.user_id,))


@dataclass(frozen=True)
class Presence:
    topic: str

    @property
    def participants(self) -> FrozenSet[str]:
        return frozenset()


@dataclass(frozen=True)
class Topic:
    topic_id: str

    @property
    def participants(self) -> FrozenSet[str]:
        return frozenset()


@dataclass(frozen=True)
class Unrecognized:
    raw: str

    @property
    def participants(self) -> FrozenSet[str]:
        return frozenset()


ChannelDescriptor = Union[DirectConversation, UserPrivate, Presence, Topic, Unrecognized]


def parse_channel(name: str) -> ChannelDescriptor:
    """Classify a channel name. Never raises; malformed names are Unrecognized."""
    if not isinstance(name, str) or not name:
        return Unrecognized(raw=str(name))

    kind, sep, rest = name.partition(SEPARATOR)
    if not sep:
        return Unrecognized(raw=name)

    match kind:
        case "dm":
            parts = rest.split(SEPARATOR)
            if len(parts) != 2:
                return Unrecognized(raw=name)
            low, high = parts
            if not low or not high or not low < high:
                return Unrecognized(raw=name)
            return DirectConversation(low=low, high=high)
        case "user":
            if not rest or SEPARATOR in rest:
                return Unrecognized(raw=name)
            return UserPrivate(user_id=rest)
        case "presence":
            if not rest:
                return Unrecognized(raw=name)
            return Presence(topic=rest)
        case "topic":
            if not rest or SEPARATOR in rest:
                return Unrecognized(raw=name)
            return Topic(topic_id=rest)
        case _:
            return Unrecognized(raw=name)


def _check_id(value: str, label: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{label} must be a non-empty string")
    if SEPARATOR in value:
        raise ValueError(f"{label} must not contain '{SEPARATOR}'")
    return value


def dm_channel_name(user_a: str, user_b: str) -> str:
    """Canonical direct-conversation channel; argument order does not matter."""
    _check_id(user_a, "user_a")
    _check_id(user_b, "user_b")
    if user_a == user_b:
        raise ValueError("a direct conversation needs two distinct users")
    low, high = sorted((user_a, user_b))
    return SEPARATOR.join((DM_PREFIX, low, high))


def user_channel_name(user_id: str) -> str:
    return SEPARATOR.join((USER_PREFIX, _check_id(user_id, "user_id")))


def presence_channel_name(topic: str) -> str:
    if not isinstance(topic, str) or not topic:
        raise ValueError("topic must be a non-empty string")
    return SEPARATOR.join((PRESENCE_PREFIX, topic))


def topic_channel_name(topic_id: str) -> str:
    return SEPARATOR.join((TOPIC_PREFIX, _check_id(topic_id, "topic_id")))
