"""Authentication routes: register, login and current identity."""
from fastapi import APIRouter, Depends, HTTPException, status

from noteart.api.deps import require_user_id
from noteart.api.schemas.auth import CredentialsPayload, LoginPayload, MeOut, RegisterOut, TokenOut
from noteart.services import auth_service as service

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=RegisterOut,
    status_code=status.HTTP_201_CREATED,
    summary="Register user",
)
def register(payload: CredentialsPayload) -> RegisterOut:
    try:
        return RegisterOut(**service.register_user(payload.email, payload.password))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/login", response_model=TokenOut, summary="Login with email and password")
def login(payload: LoginPayload) -> TokenOut:
    try:
        return TokenOut(**service.login(str(payload.email), payload.password))
    except ValueError as e:
        raise HTTPException(status_code=401, detail=f"Invalid login: {e}")


@router.get("/me", response_model=MeOut, summary="Current identity")
def me(user_id: str = Depends(require_user_id)) -> MeOut:
    return MeOut(user_id=user_id)
