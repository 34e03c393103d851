"""Password hashing, bearer token handling and credential verification."""
from datetime import timedelta
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from .config import get_settings
from .errors import InvalidCredential
from .models import User, utcnow
from .schemas import Principal

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    to_encode = data.copy()
    expire = utcnow() + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Dict[str, Any]:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise InvalidCredential("Invalid or expired token") from exc


def issue_credential(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token carrying the identity claims of ``user``.

    Tokens cannot be revoked: signing out only discards the token client-side,
    so a leaked token stays usable until ``exp``.
    """

    claims = {
        "sub": str(user.id),
        "id": user.id,
        "student_id": user.student_id,
        "role": user.role.value,
        "name": user.name,
    }
    return create_access_token(claims, expires_delta)


def verify_credential(token: str) -> Principal:
    """Decode ``token`` and return the caller identity it carries."""

    payload = decode_token(token)
    try:
        return Principal(
            id=payload.get("id"),
            student_id=payload.get("student_id"),
            name=payload.get("name"),
            role=payload.get("role"),
        )
    except SchemaValidationError as exc:
        raise InvalidCredential("Malformed token claims") from exc


def authenticate_user(db: Session, student_id: str, password: str) -> Optional[User]:
    user: Optional[User] = db.query(User).filter(User.student_id == student_id).first()
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user
