"""
Job seeker API endpoints.

Profile lookup and editing, resume upload to S3, applying to jobs, and the
user's application history.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from pydantic import Field
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hirehub.api.common import CamelModel, UtcDatetime, is_pdf, read_upload
from hirehub.core.exceptions import BadRequestException, NotFoundException
from hirehub.core.logger import setup_logger
from hirehub.db.session import get_db
from hirehub.models import ApplicationStatus, JobApplication, User
from hirehub.services import ObjectStorage, StorageError, build_object_key, get_storage
from hirehub.services.profiles import get_user, resolve_user

router = APIRouter()
logger = setup_logger("hirehub.users")

RESUME_REQUIRED = "Please upload your resume before applying"
ALREADY_APPLIED = "You have already applied for this job"


# ============== Pydantic Schemas ==============


class UserOut(CamelModel):
    id: str = Field(alias="_id")
    name: str
    email: str
    image: str
    resume: str = ""
    phone: Optional[str] = None

    @classmethod
    def from_model(cls, user: User) -> "UserOut":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            image=user.image,
            resume=user.resume or "",
            phone=user.phone,
        )


class ProfileRequest(CamelModel):
    """Identity fields forwarded by the client from the identity provider."""

    user_id: str = Field(min_length=1)
    name: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None


class ProfileResponse(CamelModel):
    success: bool = True
    message: str = ""
    user: UserOut


class UpdateProfileRequest(CamelModel):
    user_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    resume: Optional[str] = None
    phone: Optional[str] = None


class UploadResumeResponse(CamelModel):
    success: bool = True
    message: str = "Resume uploaded successfully"
    resume_url: str
    user: UserOut


class ApplyRequest(CamelModel):
    user_id: str = Field(min_length=1)
    job_id: str = Field(min_length=1)
    company_id: str = Field(min_length=1)
    job_title: str = Field(min_length=1)
    company_name: str = Field(min_length=1)
    location: str = Field(min_length=1)


class ApplicationOut(CamelModel):
    id: str = Field(alias="_id")
    user_id: str
    job_id: str
    company_id: str
    job_title: str
    company_name: str
    location: str
    applied_date: UtcDatetime
    status: ApplicationStatus

    @classmethod
    def from_model(cls, application: JobApplication) -> "ApplicationOut":
        return cls(
            id=application.id,
            user_id=application.user_id,
            job_id=application.job_id,
            company_id=application.company_id,
            job_title=application.job_title,
            company_name=application.company_name,
            location=application.location,
            applied_date=application.applied_date,
            status=application.status,
        )


class ApplyResponse(CamelModel):
    success: bool = True
    message: str = "Applied successfully"
    application: ApplicationOut


class ApplicationsRequest(CamelModel):
    user_id: str = Field(min_length=1)


class ApplicationStats(CamelModel):
    total: int = 0
    pending: int = 0
    accepted: int = 0
    rejected: int = 0


class ApplicationsResponse(CamelModel):
    success: bool = True
    applications: list[ApplicationOut]
    stats: ApplicationStats


# ============== Helper Functions ==============


def compute_stats(applications: list[JobApplication]) -> ApplicationStats:
    """Count applications per status."""
    statuses = [a.status for a in applications]
    return ApplicationStats(
        total=len(statuses),
        pending=statuses.count(ApplicationStatus.PENDING.value),
        accepted=statuses.count(ApplicationStatus.ACCEPTED.value),
        rejected=statuses.count(ApplicationStatus.REJECTED.value),
    )


def has_applied(db: Session, user_id: str, job_id: str) -> bool:
    return (
        db.query(JobApplication)
        .filter(JobApplication.user_id == user_id, JobApplication.job_id == job_id)
        .first()
        is not None
    )


# ============== API Endpoints ==============


@router.post("/profile", response_model=ProfileResponse)
async def get_profile(data: ProfileRequest, db: Session = Depends(get_db)):
    """
    Fetch the user's profile.

    Creates the user when it does not exist yet and name, email and image
    were all supplied.
    """
    user = resolve_user(db, data.user_id, data.name, data.email, data.image)
    logger.info(f"Profile fetched for {user.id} (has resume: {bool(user.resume)})")
    return ProfileResponse(user=UserOut.from_model(user))


@router.post("/update-profile", response_model=ProfileResponse)
async def update_profile(data: UpdateProfileRequest, db: Session = Depends(get_db)):
    """Update name, and resume URL or phone when given."""
    user = get_user(db, data.user_id)
    if not user:
        raise NotFoundException("User not found")

    user.name = data.name
    if data.resume:
        user.resume = data.resume
    if data.phone:
        user.phone = data.phone

    db.commit()
    db.refresh(user)

    return ProfileResponse(message="Profile updated successfully", user=UserOut.from_model(user))


@router.post("/upload-resume", response_model=UploadResumeResponse)
async def upload_resume(
    resume: Optional[UploadFile] = File(None),
    user_id: str = Form(..., alias="userId", min_length=1),
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    image: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
):
    """
    Upload a PDF resume and store its URL on the user.

    Accepts: a single PDF, at most MAX_UPLOAD_SIZE_BYTES.
    """
    if resume is None or not resume.filename:
        raise BadRequestException("No file uploaded")

    content = await read_upload(resume, is_pdf, "Only PDF files are allowed!")

    user = resolve_user(db, user_id, name, email, image)

    key = build_object_key("resumes", resume.filename, owner=user.id)
    try:
        resume_url = await run_in_threadpool(
            storage.upload_bytes, content, key, resume.content_type, ".pdf"
        )
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )

    user.resume = resume_url
    db.commit()
    db.refresh(user)

    logger.info(f"Resume saved for {user.id}: {resume_url}")
    return UploadResumeResponse(resume_url=resume_url, user=UserOut.from_model(user))


@router.post("/apply", response_model=ApplyResponse)
async def apply_for_job(data: ApplyRequest, db: Session = Depends(get_db)):
    """
    Apply to a job.

    The user needs a resume on file and may apply to each job only once.
    """
    user = get_user(db, data.user_id)
    if not user or not user.resume:
        raise BadRequestException(RESUME_REQUIRED)

    if has_applied(db, data.user_id, data.job_id):
        raise BadRequestException(ALREADY_APPLIED)

    application = JobApplication(
        user_id=data.user_id,
        job_id=data.job_id,
        company_id=data.company_id,
        job_title=data.job_title,
        company_name=data.company_name,
        location=data.location,
        status=ApplicationStatus.PENDING.value,
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with an identical concurrent request
        db.rollback()
        raise BadRequestException(ALREADY_APPLIED)
    db.refresh(application)

    logger.info(f"User {data.user_id} applied to job {data.job_id}")
    return ApplyResponse(application=ApplicationOut.from_model(application))


@router.post("/applications", response_model=ApplicationsResponse)
async def get_applications(data: ApplicationsRequest, db: Session = Depends(get_db)):
    """List the user's applications, newest first, with per-status counts."""
    applications = (
        db.query(JobApplication)
        .filter(JobApplication.user_id == data.user_id)
        .order_by(JobApplication.applied_date.desc(), JobApplication.id.desc())
        .all()
    )

    return ApplicationsResponse(
        applications=[ApplicationOut.from_model(a) for a in applications],
        stats=compute_stats(applications),
    )
