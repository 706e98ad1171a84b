"""
Auth routes: register, login and token introspection.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..auth import TokenIssuer, get_current_claims, get_token_issuer, hash_password, verify_password
from ..config import Settings, get_settings
from ..db import get_db
from ..errors import BadRequestError, InternalError, database_error_message
from ..models import User
from ..schemas import (
    ErrorResponse,
    LoginResponse,
    RegistrationResponse,
    TokenClaims,
    UserCredentials,
    UserResponse,
)

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=RegistrationResponse, responses={500: {"model": ErrorResponse}})
def register(
    payload: UserCredentials,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    hashed_pw = hash_password(payload.password, rounds=settings.BCRYPT_ROUNDS)

    try:
        new_user = User(username=payload.username, password=hashed_pw)
        db.add(new_user)
        db.commit()
        db.refresh(new_user)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Registration failed for username=%s", payload.username)
        raise InternalError(database_error_message(e)) from e

    logger.info("User registered: user_id=%s, username=%s", new_user.id, new_user.username)
    return RegistrationResponse(message="User registered", user=UserResponse.model_validate(new_user))


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def login(
    credentials: UserCredentials,
    db: Session = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    try:
        user = db.query(User).filter(User.username == credentials.username).first()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Login lookup failed for username=%s", credentials.username)
        raise InternalError(database_error_message(e)) from e

    if not user:
        logger.info("Login failed, unknown username=%s", credentials.username)
        raise BadRequestError("User not found")

    if not verify_password(credentials.password, user.password):
        logger.info("Login failed, bad password: user_id=%s, username=%s", user.id, user.username)
        raise BadRequestError("Invalid password")

    token = issuer.issue(user.id, user.username)
    logger.info("Successful login: user_id=%s, username=%s", user.id, user.username)
    return {"message": "Login successful", "token": token}


@router.get("/me", response_model=TokenClaims, responses={401: {"model": ErrorResponse}})
def read_current_user(claims: dict = Depends(get_current_claims)):
    """Return the identity carried by a valid bearer token."""
    return {"id": claims["id"], "username": claims["username"]}
