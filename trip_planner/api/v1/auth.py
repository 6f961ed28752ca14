"""
Authentication and profile endpoints.
"""

from fastapi import APIRouter, HTTPException, Request, Response, status

from trip_planner.api.deps import Authenticator, CurrentSubject, DbSession, get_client_ip
from trip_planner.kernel.identity.identity_service import IdentityService
from trip_planner.schemas.auth import LoginRequest, LoginResponse, ProfileResponse, ProfileUpdate
from trip_planner.schemas.common import MessageResponse

router = APIRouter()
profile_router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    request: Request,
    response: Response,
    data: LoginRequest,
    db: DbSession,
    authenticator: Authenticator,
):
    """
    Check username and password and set the session cookie.
    """
    if not data.username or not data.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing credentials",
        )

    identity_service = IdentityService(db, authenticator)
    result = await identity_service.authenticate(
        username=data.username,
        password=data.password,
        ip_address=get_client_ip(request),
    )
    if not result:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    user, credential = result
    authenticator.cookie_for(credential).apply(response)
    return LoginResponse(username=user.username, display_name=user.display_name)


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response, authenticator: Authenticator):
    """
    Tell the client to drop its session cookie.

    Nothing is invalidated server-side; a copy of the credential stays
    valid until it expires.
    """
    authenticator.revoke().apply(response)
    return MessageResponse(message="Logged out")


@profile_router.get("/me", response_model=ProfileResponse)
async def get_profile(subject: CurrentSubject, db: DbSession):
    """Get the current user's profile."""
    user = await IdentityService(db).get_user_by_id(subject.id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return ProfileResponse.model_validate(user)


@profile_router.put("/me", response_model=ProfileResponse)
async def update_profile(data: ProfileUpdate, subject: CurrentSubject, db: DbSession):
    """Update the current user's profile. Fields left out of the body are kept."""
    user = await IdentityService(db).update_profile(
        subject.id,
        data.model_dump(exclude_unset=True),
    )
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return ProfileResponse.model_validate(user)
