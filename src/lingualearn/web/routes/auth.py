"""Account endpoints: register, login, logout, settings."""

from fastapi import APIRouter, HTTPException, status

from lingualearn.utils.validators import (
    ValidationError,
    validate_login,
    validate_registration,
)
from lingualearn.web.converters import session_state, user_response
from lingualearn.web.schemas import (
    LoginRequest,
    RegisterRequest,
    SessionStateResponse,
    SettingsUpdate,
    UserResponse,
)
from lingualearn.web.sessions import get_engine

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=SessionStateResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest) -> SessionStateResponse:
    """Create the learner account (replaces any stored one)."""
    try:
        validate_registration(
            request.username,
            request.email,
            request.password,
            request.confirm_password,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    engine = get_engine()
    engine.register_user(request.username, request.password, request.email)
    return session_state(engine)


@router.post("/login", response_model=SessionStateResponse)
async def login(request: LoginRequest) -> SessionStateResponse:
    """Log in as the stored learner."""
    try:
        validate_login(request.username, request.password)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    engine = get_engine()
    if not engine.login_user(request.username, request.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Login failed. User not found or incorrect password.",
        )
    return session_state(engine)


@router.post("/logout", response_model=SessionStateResponse)
async def logout() -> SessionStateResponse:
    """Sign out; the stored record is kept."""
    engine = get_engine()
    engine.logout()
    return session_state(engine)


@router.get("/me", response_model=UserResponse)
async def current_user() -> UserResponse:
    """Get the signed-in learner."""
    engine = get_engine()
    if engine.user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Please log in first")
    return user_response(engine.user, engine.rules.level_step_xp)


@router.patch("/settings", response_model=UserResponse)
async def update_settings(request: SettingsUpdate) -> UserResponse:
    """Change learner preferences."""
    engine = get_engine()
    settings = engine.update_settings(
        daily_goal=request.daily_goal,
        notifications=request.notifications,
        dark_mode=request.dark_mode,
    )
    if settings is None or engine.user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Please log in first")
    return user_response(engine.user, engine.rules.level_step_xp)
