import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime

from hirehub.db.base import Base


def generate_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Recruiter(Base):
    """Company account that posts jobs."""

    __tablename__ = "recruiters"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # bcrypt hash
    image = Column(String, nullable=False, default="")  # logo URL
    created_at = Column(DateTime(timezone=True), default=utcnow)
