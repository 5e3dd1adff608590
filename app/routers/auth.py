from fastapi import APIRouter, Request
import logging

from app.core.config import settings
from app.core.exceptions import AuthenticationError
from app.core.limiter import limiter
from app.core.security import check_credentials, get_client_ip, issue_token
from app.schemas.auth import LoginRequest, LoginResponse, LoginUser

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)

@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, login_data: LoginRequest):
    # Placeholder: the token is not checked by any other endpoint
    if not check_credentials(login_data.username, login_data.password):
        logger.warning(
            "Failed login attempt",
            extra={"username": login_data.username, "ip_address": get_client_ip(request)},
        )
        raise AuthenticationError()

    logger.info("Login succeeded", extra={"username": login_data.username})
    return LoginResponse(
        token=issue_token(),
        user=LoginUser(username=login_data.username, name="Administrator"),
    )
