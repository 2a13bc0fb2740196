"""Direct message endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Request

from api.dependencies.principal import PrincipalDep
from api.dependencies.rate_limits import get_limiter
from infrastructure.services import DispatcherDep, MessageStoreDep
from modules.messaging.models import MarkReadRequest, SendDirectMessageRequest

router = APIRouter(prefix="/messages", tags=["Messages"])
limiter = get_limiter()


@router.post("/direct", status_code=201)
@limiter.limit("120/minute")
async def send_direct_message(
    request: Request,
    body: SendDirectMessageRequest,
    principal: PrincipalDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """Save a message to ``recipientId`` and publish it on the shared channel."""
    receipt = await dispatcher.send_direct_message(
        principal.user_id, body.recipient_id, body.content
    )
    return {"message": receipt.persisted, "channel": receipt.channel, "delivered": True}


@router.get("/direct/{other_user_id}")
@limiter.limit("240/minute")
async def get_conversation(
    request: Request,
    other_user_id: str,
    principal: PrincipalDep,
    messages: MessageStoreDep,
) -> Dict[str, Any]:
    """Conversation between the caller and ``other_user_id``, oldest first."""
    conversation = await messages.conversation(principal.user_id, other_user_id)
    return {"messages": [message.to_payload() for message in conversation]}


@router.post("/read")
@limiter.limit("240/minute")
async def mark_messages_read(
    request: Request,
    body: MarkReadRequest,
    principal: PrincipalDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """Mark messages from ``otherUserId`` as read and notify the sender."""
    receipt = await dispatcher.mark_conversation_read(
        principal.user_id, body.other_user_id
    )
    return {"modifiedCount": receipt.persisted["count"], "delivered": True}
