from datetime import timedelta

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from authx import AuthX, AuthXConfig
from authx.exceptions import AuthXException, MissingTokenError
from core.config import settings
from core.database import get_db
from core.errors import InvalidOrExpiredToken, MissingFields, MissingToken, NotFoundError
from models.user import User
from schemas.auth import AuthOut, LoginIn, RegisterIn, UserOut
from services.auth_services import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])

config = AuthXConfig(
    JWT_SECRET_KEY=settings.SECRET_KEY,
    JWT_ALGORITHM=settings.JWT_ALG,
    JWT_ACCESS_TOKEN_EXPIRES=timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS),
    JWT_TOKEN_LOCATION=["headers"],
    JWT_HEADER_NAME="Authorization",
    JWT_HEADER_TYPE="Bearer",
)

security = AuthX(config=config)


def _issue_token(user: User) -> str:
    return security.create_access_token(
        uid=str(user.id),
        data={"email": user.email, "username": user.username},
    )


def _has_bearer_value(request: Request) -> bool:
    scheme, _, token = (request.headers.get(security.config.JWT_HEADER_NAME) or "").partition(" ")
    return scheme == security.config.JWT_HEADER_TYPE and bool(token.strip())


async def current_user_id(request: Request) -> int:
    """Resolve the authenticated user id through authx's header lookup and verification.

    No token, an empty header or one that is not ``Bearer <value>`` counts as
    a missing token. Every other authx failure (bad signature, expiry,
    refresh token, garbage) is an invalid token.
    """
    try:
        request_token = await security.get_access_token_from_request(request)
        payload = security.verify_token(request_token, verify_type=True, verify_csrf=False)
    except MissingTokenError as exc:
        raise MissingToken() from exc
    except AuthXException as exc:
        if not _has_bearer_value(request):
            raise MissingToken() from exc
        raise InvalidOrExpiredToken() from exc

    try:
        user_id = int(payload.sub)
    except (TypeError, ValueError) as exc:
        raise InvalidOrExpiredToken() from exc

    request.state.user_id = user_id
    return user_id


@router.post("/sign-up", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
async def sign_up(data: RegisterIn, db: Session = Depends(get_db)):
    if not data.username or not data.email or not data.password:
        raise MissingFields("Tous les champs sont requis (username, email, password)")
    svc = AuthService(db)
    user = svc.register(email=data.email, username=data.username, password=data.password)
    return AuthOut(
        message="Utilisateur créé avec succès",
        token=_issue_token(user),
        user=UserOut.model_validate(user, from_attributes=True),
    )


@router.post("/sign-in", response_model=AuthOut)
async def sign_in(data: LoginIn, db: Session = Depends(get_db)):
    if not data.email or not data.password:
        raise MissingFields("Tous les champs sont requis (email, password)")
    svc = AuthService(db)
    user = svc.login(email=data.email, password=data.password)
    return AuthOut(
        message="Connexion réussie",
        token=_issue_token(user),
        user=UserOut.model_validate(user, from_attributes=True),
    )


@router.get("/me")
async def me(user_id: int = Depends(current_user_id), db: Session = Depends(get_db)):
    user = AuthService(db).get_user(user_id)
    if user is None:
        raise NotFoundError("Utilisateur inexistant")
    return {"user": UserOut.model_validate(user, from_attributes=True)}
