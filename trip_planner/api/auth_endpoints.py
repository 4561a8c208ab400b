"""
Password check used by the client before it stores the shared secret
"""
import logging

from fastapi import APIRouter, Depends

from trip_planner.config.settings import Settings
from trip_planner.core.dependencies import get_app_settings, read_json_body
from trip_planner.core.exceptions import AuthenticationError
from trip_planner.core.security import verify_password
from trip_planner.core.validation import JsonBody, as_required_string, value_of
from trip_planner.schemas.base import Envelope

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/verify", response_model=Envelope)
async def verify(
    body: JsonBody = Depends(read_json_body),
    settings: Settings = Depends(get_app_settings),
):
    """
    Check a candidate password against the configured secret

    - **password**: Candidate secret
    """
    password = as_required_string(value_of(body, ("password",)), "password")
    if not verify_password(password, settings.security.app_password):
        logger.warning("Password verification failed")
        raise AuthenticationError("Invalid password")
    return Envelope()
