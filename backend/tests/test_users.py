import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from hirehub.core.config import settings
from hirehub.models import ApplicationStatus, JobApplication, User
from hirehub.services.storage import StorageError
from tests.base import BUCKET_URL, PDF_BYTES, ApiTestCase


class TestProfile(ApiTestCase):
    def test_existing_user_is_returned(self):
        self.add_user("user_1", resume="https://cdn/cv.pdf")

        response = self.client.post("/api/user/profile", json={"userId": "user_1"})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["user"]["_id"], "user_1")
        self.assertEqual(body["user"]["resume"], "https://cdn/cv.pdf")

    def test_missing_user_created_from_identity_fields(self):
        response = self.client.post(
            "/api/user/profile",
            json={
                "userId": "user_new",
                "name": "New Person",
                "email": "new@example.com",
                "image": "https://img.example.com/new.png",
            },
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["user"]["resume"], "")
        self.assertEqual(self.count(User), 1)

    def test_missing_user_with_partial_fields_is_not_found(self):
        response = self.client.post(
            "/api/user/profile",
            json={"userId": "user_new", "name": "New Person", "email": "new@example.com"},
        )

        self.assertEqual(response.status_code, 404)
        self.assertFalse(response.json()["success"])
        self.assertEqual(self.count(User), 0)

    def test_email_taken_by_other_user(self):
        self.add_user("user_1", email="taken@example.com")

        response = self.client.post(
            "/api/user/profile",
            json={
                "userId": "user_2",
                "name": "Other",
                "email": "taken@example.com",
                "image": "https://img.example.com/o.png",
            },
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.count(User), 1)

    def test_missing_user_id_is_bad_request(self):
        response = self.client.post("/api/user/profile", json={})

        self.assertEqual(response.status_code, 400)
        self.assertIn("userId", response.json()["message"])


class TestUpdateProfile(ApiTestCase):
    def test_updates_name_and_phone(self):
        self.add_user("user_1")

        response = self.client.post(
            "/api/user/update-profile",
            json={"userId": "user_1", "name": "Jane Q. Seeker", "phone": "+1 555 0100"},
        )

        self.assertEqual(response.status_code, 200)
        user = response.json()["user"]
        self.assertEqual(user["name"], "Jane Q. Seeker")
        self.assertEqual(user["phone"], "+1 555 0100")
        self.assertEqual(user["resume"], "")

    def test_unknown_user(self):
        response = self.client.post(
            "/api/user/update-profile", json={"userId": "ghost", "name": "Ghost"}
        )

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "User not found")


class TestUploadResume(ApiTestCase):
    def upload(self, filename="cv.pdf", content=PDF_BYTES, content_type="application/pdf", **fields):
        data = {"userId": "user_1"}
        data.update(fields)
        return self.client.post(
            "/api/user/upload-resume",
            data=data,
            files={"resume": (filename, content, content_type)},
        )

    def test_upload_stores_url_on_user(self):
        self.add_user("user_1")

        response = self.upload()

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["resumeUrl"].startswith(f"{BUCKET_URL}/resumes/user_1-"))
        self.assertTrue(body["resumeUrl"].endswith("-cv.pdf"))
        self.assertEqual(body["user"]["resume"], body["resumeUrl"])

        args, _ = self.storage.upload_bytes.call_args
        self.assertEqual(args[0], PDF_BYTES)
        self.assertEqual(args[2], "application/pdf")

    def test_upload_replaces_previous_resume(self):
        self.add_user("user_1", resume="https://old/cv.pdf")

        response = self.upload(filename="new.pdf")

        self.assertNotEqual(response.json()["user"]["resume"], "https://old/cv.pdf")

    def test_upload_creates_missing_user(self):
        response = self.upload(
            name="Lazy Person",
            email="lazy@example.com",
            image="https://img.example.com/lazy.png",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.count(User), 1)

    def test_upload_for_unknown_user_without_identity_fields(self):
        response = self.upload()

        self.assertEqual(response.status_code, 404)
        self.storage.upload_bytes.assert_not_called()

    def test_non_pdf_rejected_before_any_write(self):
        response = self.upload(
            filename="cv.docx",
            content=b"PK\x03\x04",
            content_type="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            name="Lazy Person",
            email="lazy@example.com",
            image="https://img.example.com/lazy.png",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Only PDF files are allowed!")
        self.storage.upload_bytes.assert_not_called()
        self.assertEqual(self.count(User), 0)

    def test_oversized_pdf_rejected(self):
        self.add_user("user_1")
        too_big = b"%PDF" + b"0" * settings.MAX_UPLOAD_SIZE_BYTES

        response = self.upload(content=too_big)

        self.assertEqual(response.status_code, 413)
        self.storage.upload_bytes.assert_not_called()

    def test_missing_file(self):
        self.add_user("user_1")

        response = self.client.post("/api/user/upload-resume", data={"userId": "user_1"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "No file uploaded")

    def test_storage_failure_surfaces_message(self):
        self.add_user("user_1")
        self.storage.upload_bytes.side_effect = StorageError("Access Denied")

        response = self.upload()

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"success": False, "message": "Access Denied"})

        db = self.SessionLocal()
        self.assertEqual(db.get(User, "user_1").resume, "")
        db.close()


class TestApply(ApiTestCase):
    def test_apply_without_resume_fails(self):
        self.add_user("user_1", resume="")

        response = self.apply("user_1", "job_1")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Please upload your resume before applying")
        self.assertEqual(self.count(JobApplication), 0)

    def test_apply_unknown_user_fails(self):
        response = self.apply("ghost", "job_1")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.count(JobApplication), 0)

    def test_apply_once(self):
        self.add_user("user_1", resume="https://cdn/cv.pdf")

        response = self.apply("user_1", "job_1")

        self.assertEqual(response.status_code, 200)
        application = response.json()["application"]
        self.assertEqual(application["status"], "Pending")
        self.assertEqual(application["jobId"], "job_1")
        self.assertEqual(application["companyName"], "Acme")

    def test_applied_date_serialized_as_utc(self):
        self.add_user("user_1", resume="https://cdn/cv.pdf")
        self.apply("user_1", "job_1")

        listed = self.client.post("/api/user/applications", json={"userId": "user_1"})

        applied = listed.json()["applications"][0]["appliedDate"]
        self.assertTrue(applied.endswith("Z") or applied.endswith("+00:00"), applied)

    def test_second_application_rejected(self):
        self.add_user("user_1", resume="https://cdn/cv.pdf")
        self.apply("user_1", "job_1")

        response = self.apply("user_1", "job_1")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "You have already applied for this job")
        self.assertEqual(self.count(JobApplication), 1)

    def test_concurrent_duplicate_caught_by_unique_constraint(self):
        self.add_user("user_1", resume="https://cdn/cv.pdf")
        self.apply("user_1", "job_1")

        # Second request passes the pre-check as if the first had not committed yet
        with patch("hirehub.api.v1.users.has_applied", return_value=False):
            response = self.apply("user_1", "job_1")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "You have already applied for this job")
        self.assertEqual(self.count(JobApplication), 1)

    def test_same_job_different_users(self):
        self.add_user("user_1", resume="https://cdn/a.pdf")
        self.add_user("user_2", resume="https://cdn/b.pdf")

        self.assertEqual(self.apply("user_1", "job_1").status_code, 200)
        self.assertEqual(self.apply("user_2", "job_1").status_code, 200)
        self.assertEqual(self.count(JobApplication), 2)

    def test_missing_fields(self):
        self.add_user("user_1", resume="https://cdn/cv.pdf")

        response = self.client.post("/api/user/apply", json={"userId": "user_1", "jobId": "job_1"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.count(JobApplication), 0)


class TestApplications(ApiTestCase):
    def seed_applications(self):
        self.add_user("user_1", resume="https://cdn/cv.pdf")
        now = datetime.now(timezone.utc)
        db = self.SessionLocal()
        for i, status in enumerate(["Pending", "Accepted", "Rejected", "Pending"]):
            db.add(
                JobApplication(
                    user_id="user_1",
                    job_id=f"job_{i}",
                    company_id="company_1",
                    job_title=f"Role {i}",
                    company_name="Acme",
                    location="Remote",
                    applied_date=now - timedelta(days=i),
                    status=status,
                )
            )
        db.commit()
        db.close()

    def test_newest_first_with_stats(self):
        self.seed_applications()

        response = self.client.post("/api/user/applications", json={"userId": "user_1"})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual([a["jobId"] for a in body["applications"]], ["job_0", "job_1", "job_2", "job_3"])
        self.assertEqual(body["stats"], {"total": 4, "pending": 2, "accepted": 1, "rejected": 1})

    def test_no_applications(self):
        response = self.client.post("/api/user/applications", json={"userId": "nobody"})

        self.assertEqual(response.json()["applications"], [])
        self.assertEqual(response.json()["stats"]["total"], 0)

    def test_status_values(self):
        self.assertEqual(
            [s.value for s in ApplicationStatus],
            ["Pending", "Accepted", "Rejected"],
        )


if __name__ == "__main__":
    unittest.main()
