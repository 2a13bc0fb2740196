"""User presence status endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Request

from api.dependencies.principal import PrincipalDep
from api.dependencies.rate_limits import get_limiter
from infrastructure.realtime import presence_channel_name
from infrastructure.services import DispatcherDep, StatusServiceDep
from modules.notifications.models import EventNames
from modules.presence.models import StatusUpdateRequest

router = APIRouter(prefix="/users", tags=["Users"])
limiter = get_limiter()

STATUS_CHANNEL = presence_channel_name("status")


@router.patch("/status")
@limiter.limit("60/minute")
async def update_status(
    request: Request,
    body: StatusUpdateRequest,
    principal: PrincipalDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """Save the caller's status and broadcast it on the presence channel."""
    receipt = await dispatcher.publish(
        principal.user_id,
        STATUS_CHANNEL,
        EventNames.STATUS_UPDATE,
        {"status": body.status},
    )
    return {"success": True, "status": receipt.payload["status"]}


@router.get("/{user_id}/status")
@limiter.limit("240/minute")
async def get_status(
    request: Request,
    user_id: str,
    principal: PrincipalDep,
    statuses: StatusServiceDep,
) -> Dict[str, Any]:
    status = await statuses.get_status(user_id)
    return {"userId": user_id, "status": status.value}


@router.get("/me/two-factor")
@limiter.limit("120/minute")
async def get_two_factor_status(
    request: Request,
    principal: PrincipalDep,
    statuses: StatusServiceDep,
) -> Dict[str, Any]:
    """Whether the caller has two-factor authentication enabled.

    Reports ``False`` when the lookup cannot complete in time.
    """
    enabled = await statuses.two_factor_enabled(principal.user_id)
    return {"enabled": enabled}
