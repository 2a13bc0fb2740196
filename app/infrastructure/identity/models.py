"""Principal identity models."""

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class IdentitySource(str, Enum):
    """Source of identity information."""

    API_JWT = "api_jwt"
    SYSTEM = "system"


class Principal(BaseModel):
    """The authenticated identity making a request.

    The core only consumes ``user_id``; the remaining fields are kept for
    logging and downstream handlers.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(..., min_length=1, description="Canonical user identifier")
    source: IdentitySource = Field(..., description="Source of identity information")
    claims: Dict[str, Any] = Field(
        default_factory=dict, description="Verified token claims"
    )
