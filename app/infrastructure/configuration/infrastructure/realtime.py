"""Channel authorization settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class RealtimeSettings(InfrastructureSettings):
    """Real-time channel authorization configuration.

    Environment Variables:
        TOPIC_MEMBERSHIP_REQUIRED: Deny ``topic:`` channels unless a membership
            lookup confirms the principal (default: True). When False and no
            lookup is configured, topic channels are allowed and every such
            decision is logged as non-authoritative.
    """

    TOPIC_MEMBERSHIP_REQUIRED: bool = Field(
        default=True,
        alias="TOPIC_MEMBERSHIP_REQUIRED",
        description="Require an explicit membership lookup for topic channels",
    )
