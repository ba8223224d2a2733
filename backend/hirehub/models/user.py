from sqlalchemy import Column, String, DateTime

from hirehub.db.base import Base
from hirehub.models.recruiter import utcnow


class User(Base):
    """Job seeker, keyed by the identity provider's user id."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)  # external id, e.g. "user_2abc..."
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    image = Column(String, nullable=False)  # avatar URL
    resume = Column(String, nullable=False, default="")  # object URL, empty until first upload
    phone = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
