"""
Recruiter API endpoints.

Handles recruiter registration (with optional company logo) and login with
JWT token generation.
"""

import re
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import Field, computed_field, field_validator
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hirehub.api.common import CamelModel, is_image, read_upload
from hirehub.core.exceptions import BadRequestException, UnauthorizedException
from hirehub.core.logger import setup_logger
from hirehub.core.security import (
    create_recruiter_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from hirehub.db.session import get_db
from hirehub.models import Recruiter
from hirehub.services import ObjectStorage, StorageError, build_object_key, get_storage

router = APIRouter()
logger = setup_logger("hirehub.recruiters")

# Bearer scheme that lets anonymous requests through
bearer_scheme = HTTPBearer(auto_error=False)

EMAIL_PATTERN = r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$"
INVALID_CREDENTIALS = "Invalid email or password"
ALREADY_REGISTERED = "Recruiter already exists with this email"


# ============== Pydantic Schemas ==============


class RecruiterOut(CamelModel):
    """Recruiter summary (never includes the password hash)."""

    id: str = Field(alias="_id")
    name: str
    email: str
    image: str = ""

    # Clients of the recruiter endpoints read "id"; job snapshots use "_id"
    @computed_field(alias="id")
    @property
    def plain_id(self) -> str:
        return self.id

    @classmethod
    def from_model(cls, recruiter: Recruiter) -> "RecruiterOut":
        return cls(
            id=recruiter.id,
            name=recruiter.name,
            email=recruiter.email,
            image=recruiter.image or "",
        )


class RecruiterLogin(CamelModel):
    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class AuthResponse(CamelModel):
    success: bool = True
    message: str
    token: str
    recruiter: RecruiterOut


# ============== Helper Functions ==============


def normalize_email(email: str) -> str:
    """Lower-case and validate an email address."""
    email = email.strip().lower()
    if not re.match(EMAIL_PATTERN, email):
        raise BadRequestException("Invalid email format")
    return email


def get_recruiter_by_email(db: Session, email: str) -> Optional[Recruiter]:
    return db.query(Recruiter).filter(Recruiter.email == email).first()


def authenticate_recruiter(db: Session, email: str, password: str) -> Optional[Recruiter]:
    """Return the recruiter when the credentials match, else None."""
    recruiter = get_recruiter_by_email(db, email)
    if not recruiter:
        return None
    if not verify_password(password, recruiter.password):
        return None
    return recruiter


async def discard_logo(storage: ObjectStorage, key: str) -> None:
    """Delete a logo uploaded for a registration that did not go through."""
    try:
        await run_in_threadpool(storage.delete_object, key)
    except StorageError as e:
        logger.warning(f"Orphaned logo {key} left in bucket: {e}")


async def get_optional_recruiter(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[Recruiter]:
    """
    Dependency resolving the recruiter behind a bearer token, if one was sent.

    Returns None for anonymous requests; raises 401 for a bad or expired token.
    """
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    if payload is None or not payload.get("sub"):
        raise UnauthorizedException()

    recruiter = db.query(Recruiter).filter(Recruiter.id == payload["sub"]).first()
    if recruiter is None:
        raise UnauthorizedException()

    return recruiter


# ============== API Endpoints ==============


@router.post("/register", response_model=AuthResponse)
async def register(
    name: str = Form(..., min_length=1),
    email: str = Form(...),
    password: str = Form(..., min_length=1),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
):
    """
    Register a new recruiter.

    The optional logo is uploaded to S3 before the account is created.
    """
    email = normalize_email(email)
    logger.info(f"Registering recruiter {email} (logo: {bool(image and image.filename)})")

    if get_recruiter_by_email(db, email):
        raise BadRequestException(ALREADY_REGISTERED)

    image_url = ""
    key = None
    if image is not None and image.filename:
        content = await read_upload(image, is_image, "Only image files are allowed!")
        key = build_object_key("recruiter-logos", image.filename)
        try:
            image_url = await run_in_threadpool(
                storage.upload_bytes, content, key, image.content_type
            )
        except StorageError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=str(e),
            )

    recruiter = Recruiter(
        name=name,
        email=email,
        password=get_password_hash(password),
        image=image_url,
    )
    db.add(recruiter)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if key:
            await discard_logo(storage, key)
        raise BadRequestException(ALREADY_REGISTERED)
    db.refresh(recruiter)

    logger.info(f"Recruiter created: {recruiter.id}")

    return AuthResponse(
        message="Recruiter registered successfully",
        token=create_recruiter_token(recruiter.id, recruiter.email),
        recruiter=RecruiterOut.from_model(recruiter),
    )


@router.post("/login", response_model=AuthResponse)
async def login(data: RecruiterLogin, db: Session = Depends(get_db)):
    """
    Login and get a JWT bearer token.

    Unknown email and wrong password produce the same error.
    """
    recruiter = authenticate_recruiter(db, data.email, data.password)

    if not recruiter:
        logger.info(f"Failed login for {data.email}")
        raise UnauthorizedException(INVALID_CREDENTIALS)

    logger.info(f"Recruiter logged in: {recruiter.id}")

    return AuthResponse(
        message="Login successful",
        token=create_recruiter_token(recruiter.id, recruiter.email),
        recruiter=RecruiterOut.from_model(recruiter),
    )
