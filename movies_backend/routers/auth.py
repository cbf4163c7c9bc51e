from fastapi import APIRouter, Depends, Header, HTTPException, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession
from movies_backend.utils.database import get_db
from movies_backend.utils.messages import MessageCatalog, get_messages
from movies_backend.services.auth_service import UserClaims, create_access_token
from movies_backend.services.errors import AlreadyRevoked, EmailInUse, InvalidCredentials, MissingToken
from movies_backend.services.session_service import revoke
from movies_backend.services.user_service import register_user, verify_credentials
from movies_backend.deps import get_current_user
import html
import logging
import re

router = APIRouter(prefix="/api/auth", tags=["auth"])

logger = logging.getLogger("movies_backend.auth")

PASSWORD_MIN_LENGTH = 8
# bcrypt only accepts up to 72 bytes
PASSWORD_MAX_BYTES = 72


# ---------------------- MODELS ----------------------
# Validators raise ValueError with a message key; the validation handler in
# main.py resolves it through the message catalog.
class RegisterIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    password: str

    @field_validator("first_name")
    @classmethod
    def first_name_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("errors.auth.firstNameRequired")
        return html.escape(value.strip())

    @field_validator("last_name")
    @classmethod
    def last_name_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("errors.auth.lastNameRequired")
        return html.escape(value.strip())

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        """Ensure password meets security requirements."""
        if len(value) < PASSWORD_MIN_LENGTH:
            raise ValueError("errors.auth.passwordMinLength")
        if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError("errors.auth.passwordMaxLength")
        if not re.search(r"[a-z]", value):
            raise ValueError("errors.auth.passwordLowercase")
        if not re.search(r"[A-Z]", value):
            raise ValueError("errors.auth.passwordUppercase")
        if not re.search(r"[0-9]", value):
            raise ValueError("errors.auth.passwordNumber")
        if not re.search(r"[^a-zA-Z0-9]", value):
            raise ValueError("errors.auth.passwordSpecialChar")
        return value


class LoginIn(BaseModel):
    email: EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def password_required(cls, value: str) -> str:
        if not value:
            raise ValueError("errors.auth.passwordRequired")
        return value


# ---------------------- ROUTES ----------------------
@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterIn,
    db: AsyncSession = Depends(get_db),
    messages: MessageCatalog = Depends(get_messages),
):
    logger.info(f"POST /register received for email: {payload.email}")
    try:
        user_id = await register_user(db, payload.email, payload.first_name, payload.last_name, payload.password)
    except EmailInUse as e:
        raise HTTPException(status_code=e.status_code, detail=messages.get(e.message_key))

    return {"message": messages.get("success.auth.registered"), "userId": user_id}


@router.post("/login")
async def login(
    payload: LoginIn,
    db: AsyncSession = Depends(get_db),
    messages: MessageCatalog = Depends(get_messages),
):
    logger.info(f"POST /login received for email: {payload.email}")
    try:
        user = await verify_credentials(db, payload.email, payload.password)
    except InvalidCredentials as e:
        raise HTTPException(status_code=e.status_code, detail=messages.get(e.message_key))

    token = create_access_token(user.id, user.email)
    logger.info(f"User logged in successfully: {payload.email}")
    return {"message": messages.get("success.auth.loggedIn"), "token": token}


@router.post("/logout")
async def logout(
    authorization: str = Header(None),
    db: AsyncSession = Depends(get_db),
    messages: MessageCatalog = Depends(get_messages),
):
    try:
        await revoke(db, authorization)
    except MissingToken as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=messages.get(e.message_key))
    except AlreadyRevoked as e:
        raise HTTPException(status_code=e.status_code, detail=messages.get(e.message_key))

    logger.info("Session token revoked")
    return {"message": messages.get("success.auth.loggedOut")}


@router.get("/me")
async def get_current_user_info(current_user: UserClaims = Depends(get_current_user)):
    return {"id": current_user.user_id, "email": current_user.email, "tokenId": current_user.token_id}
