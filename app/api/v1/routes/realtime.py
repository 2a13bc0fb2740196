"""Real-time event publishing and broker subscription checks."""

from typing import Any, Dict

from fastapi import APIRouter, Request

from api.dependencies.principal import PrincipalDep
from api.dependencies.rate_limits import get_limiter
from infrastructure.services import DispatcherDep
from modules.notifications.models import ChannelAuthRequest, PublishEventRequest

router = APIRouter(prefix="/realtime", tags=["Realtime"])
limiter = get_limiter()


@router.post("/events")
@limiter.limit("240/minute")
async def publish_event(
    request: Request,
    body: PublishEventRequest,
    principal: PrincipalDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """Publish ``event`` on ``channel`` as the caller."""
    receipt = await dispatcher.publish(
        principal.user_id, body.channel, body.event, body.data
    )
    return receipt.model_dump()


@router.post("/auth")
@limiter.limit("240/minute")
async def authorize_channel(
    request: Request,
    body: ChannelAuthRequest,
    principal: PrincipalDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """Decide whether the caller may subscribe to ``channelName``."""
    decision = dispatcher.authorize_subscription(principal.user_id, body.channel_name)
    response: Dict[str, Any] = {"channel": body.channel_name, "allowed": True}
    if decision.member_info is not None:
        response["userInfo"] = decision.member_info
    return response
