"""User Routes — signup, login, lookup, deletion and password reset.

Invariants:
    - Malformed bodies -> 400 with a fixed message, before any service call
    - Err results -> 500 {"error": <message>} (domain failures included)
    - Ok results -> SafeUserResponse; passwords never serialized
    - Every operation is reachable under /user/... and the /users REST aliases

Design Decisions:
    - Domain failures (not found, duplicate, bad credentials) stay on 500 to keep
      the existing client contract; the status is not derived from the message
    - Body taken as raw JSON (Body(None)) so shape checks live in core/validation.py
"""

import logging
from collections.abc import Mapping
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from msgboard.api.dependencies import get_user_service
from msgboard.core.domain_types import SafeUser
from msgboard.core.result import Result
from msgboard.core.validation import is_non_empty_string, is_user_body_valid
from msgboard.schemas.user import SafeUserResponse
from msgboard.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["users"])

INVALID_USER_BODY = "Invalid user body"
USERNAME_REQUIRED = "username is required"
NEW_PASSWORD_REQUIRED = "new password is required"
INVALID_USERNAME = "Invalid username is required"


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"error": message},
    )


def _respond(result: Result[SafeUser]):
    if not result.is_ok:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=result.to_response(),
        )
    return SafeUserResponse.from_safe_user(result.value)


def _credentials(payload: Mapping[str, Any]) -> dict:
    return {
        "username": payload["username"].strip(),
        "password": payload["password"].strip(),
    }


@router.post(
    "/user/signup", response_model=SafeUserResponse,
    status_code=status.HTTP_201_CREATED,
)
@router.post(
    "/users", response_model=SafeUserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    payload: Any = Body(None),
    users: UserService = Depends(get_user_service),
):
    """Create an account."""
    if not is_user_body_valid(payload):
        logger.info("Rejected signup: invalid user body")
        return _bad_request(INVALID_USER_BODY)
    return _respond(await users.save_user(_credentials(payload)))


@router.post("/user/login", response_model=SafeUserResponse)
@router.post("/users/login", response_model=SafeUserResponse)
async def login_user(
    payload: Any = Body(None),
    users: UserService = Depends(get_user_service),
):
    """Check credentials and return the public user."""
    if not is_user_body_valid(payload):
        logger.info("Rejected login: invalid user body")
        return _bad_request(INVALID_USER_BODY)
    return _respond(await users.login_user(_credentials(payload)))


@router.get("/user/getUser/{username}", response_model=SafeUserResponse)
@router.get("/users/{username}", response_model=SafeUserResponse)
async def get_user(
    username: str, users: UserService = Depends(get_user_service),
):
    if not is_non_empty_string(username):
        return PlainTextResponse(
            INVALID_USERNAME, status_code=status.HTTP_400_BAD_REQUEST,
        )
    return _respond(await users.get_user_by_username(username))


@router.delete("/user/deleteUser/{username}", response_model=SafeUserResponse)
@router.delete("/users/{username}", response_model=SafeUserResponse)
async def delete_user(
    username: str, users: UserService = Depends(get_user_service),
):
    # Blank names reach the service and come back as "User not found"
    return _respond(await users.delete_user_by_username(username))


async def _reset_password(
    raw_username: Any, payload: Any, users: UserService,
):
    username = raw_username.strip() if isinstance(raw_username, str) else ""
    new_password = payload.get("password") if isinstance(payload, Mapping) else None
    new_password = new_password.strip() if isinstance(new_password, str) else ""

    if not username:
        return _bad_request(USERNAME_REQUIRED)
    if not new_password:
        return _bad_request(NEW_PASSWORD_REQUIRED)
    return _respond(await users.update_user(username, {"password": new_password}))


@router.patch("/user/resetPassword", response_model=SafeUserResponse)
async def reset_password(
    payload: Any = Body(None),
    users: UserService = Depends(get_user_service),
):
    """Replace a user's password. Body: {username, password}."""
    raw_username = payload.get("username") if isinstance(payload, Mapping) else None
    return await _reset_password(raw_username, payload, users)


@router.patch("/users/{username}/password", response_model=SafeUserResponse)
async def reset_password_by_path(
    username: str,
    payload: Any = Body(None),
    users: UserService = Depends(get_user_service),
):
    """Replace a user's password. Body: {password}."""
    return await _reset_password(username, payload, users)
