from hirehub.models.user import User
from hirehub.models.recruiter import Recruiter
from hirehub.models.job import Job
from hirehub.models.application import ApplicationStatus, JobApplication

__all__ = ["User", "Recruiter", "Job", "JobApplication", "ApplicationStatus"]
