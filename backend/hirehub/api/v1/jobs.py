"""
Job API endpoints.

Public listing of visible postings, single-job lookup, and job creation.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy.orm import Session

from hirehub.api.common import CamelModel, UtcDatetime
from hirehub.api.v1.recruiters import get_optional_recruiter
from hirehub.core.exceptions import ForbiddenException, NotFoundException
from hirehub.core.logger import setup_logger
from hirehub.db.session import get_db
from hirehub.models import Job, Recruiter

router = APIRouter()
logger = setup_logger("hirehub.jobs")


# ============== Pydantic Schemas ==============


class CompanySnapshot(CamelModel):
    """Company details copied onto the job at posting time."""

    id: str = Field(alias="_id")
    name: str
    email: str
    image: str = ""


class JobOut(CamelModel):
    id: str = Field(alias="_id")
    title: str
    description: str
    location: str
    category: str
    level: str
    salary: float
    company_id: CompanySnapshot  # serialized as "companyId", matching the front end
    date: UtcDatetime
    visible: bool

    @classmethod
    def from_model(cls, job: Job) -> "JobOut":
        return cls(
            id=job.id,
            title=job.title,
            description=job.description,
            location=job.location,
            category=job.category,
            level=job.level,
            salary=job.salary,
            company_id=CompanySnapshot.model_validate(job.company),
            date=job.date,
            visible=job.visible,
        )


class JobCreate(CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)  # rich text (HTML)
    location: str = Field(min_length=1)
    category: str = Field(min_length=1)
    level: str = Field(min_length=1)
    salary: float = Field(ge=0, allow_inf_nan=False)
    company_id: str = Field(min_length=1)
    visible: bool = True


class JobListResponse(CamelModel):
    success: bool = True
    jobs: list[JobOut]


class JobResponse(CamelModel):
    success: bool = True
    message: str = ""
    job: JobOut


# ============== API Endpoints ==============


@router.get("", response_model=JobListResponse)
async def list_jobs(db: Session = Depends(get_db)):
    """List visible jobs, most recent first."""
    jobs = (
        db.query(Job)
        .filter(Job.visible.is_(True))
        .order_by(Job.date.desc(), Job.id.desc())
        .all()
    )
    return JobListResponse(jobs=[JobOut.from_model(job) for job in jobs])


@router.post("/create", response_model=JobResponse)
async def create_job(
    data: JobCreate,
    db: Session = Depends(get_db),
    current_recruiter: Optional[Recruiter] = Depends(get_optional_recruiter),
):
    """
    Post a new job for the company identified by ``companyId``.

    When a bearer token is sent it must belong to that company.
    """
    if current_recruiter is not None and current_recruiter.id != data.company_id:
        raise ForbiddenException("You can only post jobs for your own company")

    company = db.query(Recruiter).filter(Recruiter.id == data.company_id).first()
    if not company:
        raise NotFoundException("Company not found")

    job = Job(
        title=data.title,
        description=data.description,
        location=data.location,
        category=data.category,
        level=data.level,
        salary=data.salary,
        company={
            "_id": company.id,
            "name": company.name,
            "email": company.email,
            "image": company.image or "",
        },
        visible=data.visible,
    )
    db.add(job)
    db.commit()
    db.refresh(job)

    logger.info(f"Job {job.id} created for company {company.id}")
    return JobResponse(message="Job created successfully", job=JobOut.from_model(job))


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, db: Session = Depends(get_db)):
    """Fetch one job by id."""
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise NotFoundException("Job not found")
    return JobResponse(job=JobOut.from_model(job))
