"""Real-time channels: naming, authorization and broker clients."""

from infrastructure.realtime.authorizer import (
    AuthorizationDecision,
    ChannelAction,
    ChannelAuthorizer,
)
from infrastructure.realtime.broker import (
    Broker,
    InMemoryBroker,
    PublishedEvent,
    RedisBroker,
)
from infrastructure.realtime.channels import (
    ChannelDescriptor,
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
from infrastructure.realtime.membership import InMemoryTopicMembership, TopicMembership

__all__ = [
    "AuthorizationDecision",
    "Broker",
    "ChannelAction",
    "ChannelAuthorizer",
    "ChannelDescriptor",
    "DirectConversation",
    "InMemoryBroker",
    "InMemoryTopicMembership",
    "Presence",
    "PublishedEvent",
    "RedisBroker",
    "Topic",
    "TopicMembership",
    "Unrecognized",
    "UserPrivate",
    "dm_channel_name",
    "parse_channel",
    "presence_channel_name",
    "topic_channel_name",
    "user_channel_name",
]
