"""
Request-scoped dependencies shared by the routers.

There is no session model: the acting user is taken from the ``X-User-Id`` /
``X-User-Name`` headers and falls back to the console administrator.
"""
from typing import Optional

from fastapi import Header, Request

from app.core.schemas import ActorContext
from app.core.security import get_client_ip, get_user_agent

DEFAULT_USER_ID = "admin"
DEFAULT_USER_NAME = "Administrator"


def get_actor(
    request: Request,
    x_user_id: Optional[str] = Header(default=None),
    x_user_name: Optional[str] = Header(default=None),
) -> ActorContext:
    return ActorContext(
        user_id=x_user_id or DEFAULT_USER_ID,
        user_name=x_user_name or DEFAULT_USER_NAME,
        ip_address=get_client_ip(request),
        user_agent=get_user_agent(request),
    )


def with_user(actor: ActorContext, user_id: Optional[str], user_name: Optional[str]) -> ActorContext:
    """Body-supplied identity (checker, locker) overrides the header identity."""
    return actor.model_copy(update={
        "user_id": user_id or actor.user_id,
        "user_name": user_name or actor.user_name,
    })
