"""
HireHub Database Seeder

Creates a sample recruiter account and one visible job posting so the front
end has something to show on a fresh database.
"""

from hirehub.core.security import get_password_hash
from hirehub.db.base import Base
from hirehub.db.session import SessionLocal, engine
from hirehub.models import Job, Recruiter

SAMPLE_RECRUITER = {
    "name": "Admin Company",
    "email": "admin@gmail.com",
    "password": "admin@123",
}


def seed_database(session_factory=SessionLocal, bind=engine) -> bool:
    """
    Seed the database with sample data.

    Returns False when the sample recruiter already exists.
    """

    Base.metadata.create_all(bind=bind)

    db = session_factory()

    try:
        existing = (
            db.query(Recruiter)
            .filter(Recruiter.email == SAMPLE_RECRUITER["email"])
            .first()
        )
        if existing:
            print("Sample recruiter already exists. Skipping...")
            print(f"   Login with {SAMPLE_RECRUITER['email']} / {SAMPLE_RECRUITER['password']}")
            return False

        print("Seeding database...")

        recruiter = Recruiter(
            name=SAMPLE_RECRUITER["name"],
            email=SAMPLE_RECRUITER["email"],
            password=get_password_hash(SAMPLE_RECRUITER["password"]),
            image="",
        )
        db.add(recruiter)
        db.flush()  # Get ID for the job's company snapshot

        job = Job(
            title="Backend Engineer",
            description="<p>Build and run the APIs behind our job board.</p>",
            location="Remote",
            category="Programming",
            level="Intermediate Level",
            salary=85000,
            company={
                "_id": recruiter.id,
                "name": recruiter.name,
                "email": recruiter.email,
                "image": recruiter.image,
            },
            visible=True,
        )
        db.add(job)

        db.commit()

        print("✅ Database seeded successfully!")
        print(f"   - Recruiter: {SAMPLE_RECRUITER['email']} (password: {SAMPLE_RECRUITER['password']})")
        print(f"   - Job: {job.title} ({job.id})")
        return True

    except Exception as e:
        db.rollback()
        print(f"❌ Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
