import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from campus import auth
from campus.database import get_db
from campus.dependencies import get_current_principal, require_admin
from campus.errors import ConflictError, NotFound, Unauthenticated
from campus.models import RoleEnum, User
from campus.rate_limit import SIGNIN_LIMIT, SIGNUP_LIMIT, limiter
from campus.schemas import AuthResponse, Message, Principal, SigninRequest, SignupRequest, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(access_token=auth.issue_credential(user), user=UserRead.model_validate(user))


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(SIGNUP_LIMIT)
def signup(request: Request, user_in: SignupRequest, db: Session = Depends(get_db)) -> AuthResponse:
    if db.query(User).filter(User.student_id == user_in.student_id).first():
        raise ConflictError("Student ID already registered")

    user = User(
        student_id=user_in.student_id,
        name=user_in.name,
        hashed_password=auth.get_password_hash(user_in.password),
        role=RoleEnum.STUDENT,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("New student account '%s'", user.student_id)
    return _auth_response(user)


@router.post("/signin", response_model=AuthResponse)
@limiter.limit(SIGNIN_LIMIT)
def signin(request: Request, credentials: SigninRequest, db: Session = Depends(get_db)) -> AuthResponse:
    user = auth.authenticate_user(db, credentials.student_id, credentials.password)
    if not user:
        logger.warning("Failed sign-in for '%s'", credentials.student_id)
        raise Unauthenticated("Invalid student ID or password")
    return _auth_response(user)


@router.post("/signout", response_model=Message)
def signout(current_user: Principal = Depends(get_current_principal)) -> Message:
    # tokens are stateless; the client discards its copy and it lapses at expiry
    logger.info("User %s signed out", current_user.student_id)
    return Message(message="Signed out successfully")


@router.get("/me", response_model=UserRead)
def me(current_user: Principal = Depends(get_current_principal), db: Session = Depends(get_db)) -> User:
    user = db.get(User, current_user.id)
    if not user:
        raise NotFound("User not found")
    return user


@router.get("/users", response_model=list[UserRead])
def list_users(_: Principal = Depends(require_admin), db: Session = Depends(get_db)) -> list[User]:
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
