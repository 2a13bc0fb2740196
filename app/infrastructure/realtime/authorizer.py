"""Per-event channel authorization.

Pure and synchronous: classifies the channel with ``parse_channel`` and
applies the rule for its kind. The same rules govern publishing and
subscribing.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

import structlog

from infrastructure.realtime.channels import (
    ChannelDescriptor,
    DirectConversation,
    Presence,
    Topic,
    Unrecognized,
    UserPrivate,
    parse_channel,
)
from infrastructure.realtime.membership import TopicMembership

logger = structlog.get_logger()


class ChannelAction(str, Enum):
    SUBSCRIBE = "subscribe"
    PUBLISH = "publish"


@dataclass(frozen=True)
class AuthorizationDecision:
    """Outcome of an authorization check.

    Attributes:
        allowed: Whether the action is permitted
        channel: The parsed channel descriptor
        reason: Short machine-readable reason
        member_info: Presence member data attached on allowed presence subscriptions
    """

    allowed: bool
    channel: ChannelDescriptor
    reason: str
    member_info: Optional[Dict[str, Any]] = field(default=None)


class ChannelAuthorizer:
    """Decides whether a principal may act on a channel.

    Args:
        membership: Lookup used for ``topic:`` channels.
        membership_required: When True, topic channels are denied unless
            ``membership`` confirms the principal. When False and no lookup
            is configured, topic channels are allowed and a warning is logged.
    """

    def __init__(
        self,
        membership: Optional[TopicMembership] = None,
        membership_required: bool = True,
    ):
        self.membership = membership
        self.membership_required = membership_required
        self.log = logger.bind(component="channel_authorizer")

    def authorize(
        self,
        principal_id: Optional[str],
        channel_name: str,
        action: ChannelAction = ChannelAction.PUBLISH,
    ) -> AuthorizationDecision:
        channel = parse_channel(channel_name)
        if not principal_id:
            return self._decide(False, channel, "unauthenticated", channel_name, action)

        match channel:
            case DirectConversation(low=low, high=high):
                allowed = principal_id in (low, high)
                reason = "participant" if allowed else "not_a_participant"
            case UserPrivate(user_id=user_id):
                allowed = principal_id == user_id
                reason = "owner" if allowed else "not_owner"
            case Presence():
                return AuthorizationDecision(
                    allowed=True,
                    channel=channel,
                    reason="authenticated",
                    member_info=(
                        {"user_id": principal_id}
                        if action == ChannelAction.SUBSCRIBE
                        else None
                    ),
                )
            case Topic(topic_id=topic_id):
                allowed, reason = self._topic_rule(topic_id, principal_id)
            case Unrecognized():
                allowed, reason = False, "unrecognized_channel"

        return self._decide(allowed, channel, reason, channel_name, action, principal_id)

    def is_allowed(
        self,
        principal_id: Optional[str],
        channel_name: str,
        action: ChannelAction = ChannelAction.PUBLISH,
    ) -> bool:
        return self.authorize(principal_id, channel_name, action).allowed

    def _topic_rule(self, topic_id: str, principal_id: str) -> tuple[bool, str]:
        if self.membership is not None:
            if self.membership.is_member(topic_id, principal_id):
                return True, "topic_member"
            return False, "not_a_topic_member"
        if self.membership_required:
            return False, "membership_unavailable"
        self.log.warning(
            "topic_authorization_unchecked",
            topic_id=topic_id,
            principal_id=principal_id,
        )
        return True, "membership_not_enforced"

    def _decide(
        self,
        allowed: bool,
        channel: ChannelDescriptor,
        reason: str,
        channel_name: str,
        action: ChannelAction,
        principal_id: Optional[str] = None,
    ) -> AuthorizationDecision:
        if not allowed:
            self.log.info(
                "channel_authorization_denied",
                channel=channel_name,
                action=action.value,
                principal_id=principal_id,
                reason=reason,
            )
        return AuthorizationDecision(allowed=allowed, channel=channel, reason=reason)
