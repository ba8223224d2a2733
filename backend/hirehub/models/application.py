from enum import Enum

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint

from hirehub.db.base import Base
from hirehub.models.recruiter import generate_id, utcnow


class ApplicationStatus(str, Enum):
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class JobApplication(Base):
    """
    A user's application to one job.

    Job title, company name and location are copied from the caller's
    request at apply time.
    """

    __tablename__ = "job_applications"
    __table_args__ = (
        UniqueConstraint("user_id", "job_id", name="uq_job_applications_user_job"),
    )

    id = Column(String(32), primary_key=True, default=generate_id)
    user_id = Column(String, ForeignKey("users.id"), index=True, nullable=False)
    job_id = Column(String, nullable=False)
    company_id = Column(String, nullable=False)

    job_title = Column(String, nullable=False)
    company_name = Column(String, nullable=False)
    location = Column(String, nullable=False)

    applied_date = Column(DateTime(timezone=True), default=utcnow, index=True)
    status = Column(String, default=ApplicationStatus.PENDING.value, nullable=False)
