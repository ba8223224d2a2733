from sqlalchemy import Column, String, Float, Boolean, DateTime, JSON, Text, CheckConstraint

from hirehub.db.base import Base
from hirehub.models.recruiter import generate_id, utcnow


class Job(Base):
    """
    Job posting.

    The posting company is copied in as a snapshot rather than joined, so
    listings never need a second lookup.
    """

    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_jobs_salary_non_negative"),
    )

    id = Column(String(32), primary_key=True, default=generate_id)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)  # rich text (HTML)
    location = Column(String, nullable=False)
    category = Column(String, nullable=False)
    level = Column(String, nullable=False)
    salary = Column(Float, nullable=False)

    # Format: {"_id": ..., "name": ..., "email": ..., "image": ...}
    company = Column(JSON, nullable=False, default=dict)

    date = Column(DateTime(timezone=True), default=utcnow, index=True)
    visible = Column(Boolean, default=True, nullable=False, index=True)
