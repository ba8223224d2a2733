"""
Job seeker profile resolution.

Users are normally provisioned by the identity provider. When that event was
missed, the first profile fetch or resume upload creates the record from the
identity fields the client forwards.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hirehub.core.exceptions import BadRequestException, NotFoundException
from hirehub.core.logger import setup_logger
from hirehub.models import User

logger = setup_logger("hirehub.users")

USER_NOT_FOUND = "User not found. Please try logging out and logging in again."


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def resolve_user(
    db: Session,
    user_id: str,
    name: Optional[str] = None,
    email: Optional[str] = None,
    image: Optional[str] = None,
) -> User:
    """
    Return the user with ``user_id``, creating it when all identity fields are given.

    Raises:
        NotFoundException: the user is missing and name, email or image is absent
    """
    user = get_user(db, user_id)
    if user is not None:
        return user

    if not (name and email and image):
        logger.info(
            f"User {user_id} not found and cannot be created "
            f"(name={bool(name)}, email={bool(email)}, image={bool(image)})"
        )
        raise NotFoundException(USER_NOT_FOUND)

    user = User(id=user_id, name=name, email=email, image=image, resume="")
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestException("Another account already uses this email")
    db.refresh(user)

    logger.info(f"Created user {user_id} from identity provider data")
    return user


def sync_user(db: Session, user_id: str, name: str, email: str, image: str) -> User:
    """
    Create or update a user from an identity provider event.

    The stored resume is never touched.
    """
    user = get_user(db, user_id)
    if user is None:
        user = User(id=user_id, name=name, email=email, image=image, resume="")
        db.add(user)
    else:
        user.name = name
        user.email = email
        user.image = image

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestException("Another account already uses this email")
    db.refresh(user)

    logger.info(f"Synced user {user_id} from identity provider")
    return user
