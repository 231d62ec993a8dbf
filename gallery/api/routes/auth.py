"""Login, logout, signup and session inspection."""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.api.deps import (
    get_admin_credentials,
    get_session_id,
    get_settings,
    get_viewer,
)
from gallery.core.config import Settings
from gallery.core.viewer import Viewer
from gallery.db.session import get_db
from gallery.models import User
from gallery.schemas import LoginRequest, MeResponse, SignupRequest, UserInfo
from gallery.services import accounts, login_sessions
from gallery.services.accounts import AdminCredentials

router = APIRouter()


@router.post("/login")
async def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    admin: AdminCredentials = Depends(get_admin_credentials),
) -> dict:
    """
    Log in with the admin fallback identity or an approved account.

    Any session the caller already holds is closed first.
    """
    identifier = body.email or body.username
    result = await accounts.authenticate(db, identifier, body.password, admin)

    await login_sessions.close_session(db, get_session_id(request))

    session = await login_sessions.open_session(
        db,
        user_id=result.user_id,
        is_admin=result.is_admin,
        max_age_minutes=settings.session_max_age_minutes,
    )
    response.set_cookie(
        settings.session_cookie_name,
        session.id,
        max_age=settings.session_max_age_minutes * 60,
        httponly=True,
        samesite="lax",
    )

    if result.is_admin:
        user = UserInfo(admin=True)
    else:
        user = UserInfo(id=result.user_id, email=result.email)
    return {"success": True, "user": user.model_dump(exclude_defaults=True)}


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> dict:
    await login_sessions.close_session(db, get_session_id(request))
    response.delete_cookie(settings.session_cookie_name)
    return {"success": True}


@router.get("/auth/check")
async def auth_check(viewer: Viewer = Depends(get_viewer)) -> dict:
    return {"authenticated": viewer.authenticated}


@router.get("/me", response_model=MeResponse, response_model_exclude_none=True)
async def me(
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
) -> MeResponse:
    if not viewer.authenticated:
        return MeResponse(authenticated=False)
    if viewer.is_admin:
        return MeResponse(authenticated=True, user=UserInfo(admin=True))

    user = await db.get(User, viewer.user_id)
    if user is None:
        return MeResponse(authenticated=False)
    return MeResponse(authenticated=True, user=UserInfo(id=user.id, email=user.email))


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Create a pending account. No session is opened."""
    await accounts.signup(db, body.email, body.password, settings.min_password_length)
    return {
        "success": True,
        "message": "Account created. Awaiting admin approval before you can log in.",
        "pendingApproval": True,
    }
