import unittest

from hirehub.models import JobApplication
from tests.base import PDF_BYTES, ApiTestCase


class TestJobBoardFlow(ApiTestCase):
    def test_post_browse_upload_apply(self):
        company = self.register_recruiter().json()["recruiter"]
        company_id = company["_id"]

        job_a = self.create_job(company_id, title="Job A").json()["job"]
        self.create_job(company_id, title="Job B", visible=False)

        listed = self.client.get("/api/jobs").json()["jobs"]
        self.assertEqual([j["_id"] for j in listed], [job_a["_id"]])

        profile = self.client.post(
            "/api/user/profile",
            json={
                "userId": "user_u",
                "name": "U",
                "email": "u@example.com",
                "image": "https://img.example.com/u.png",
            },
        ).json()
        self.assertEqual(profile["user"]["resume"], "")

        apply_body = {
            "userId": "user_u",
            "jobId": job_a["_id"],
            "companyId": job_a["companyId"]["_id"],
            "jobTitle": job_a["title"],
            "companyName": job_a["companyId"]["name"],
            "location": job_a["location"],
        }
        self.assertEqual(self.client.post("/api/user/apply", json=apply_body).status_code, 400)
        self.assertEqual(self.count(JobApplication), 0)

        uploaded = self.client.post(
            "/api/user/upload-resume",
            data={"userId": "user_u"},
            files={"resume": ("u.pdf", PDF_BYTES, "application/pdf")},
        )
        self.assertEqual(uploaded.status_code, 200)

        self.assertEqual(self.client.post("/api/user/apply", json=apply_body).status_code, 200)
        self.assertEqual(self.client.post("/api/user/apply", json=apply_body).status_code, 400)

        history = self.client.post("/api/user/applications", json={"userId": "user_u"}).json()
        self.assertEqual(history["stats"], {"total": 1, "pending": 1, "accepted": 0, "rejected": 0})
        self.assertEqual(history["applications"][0]["jobTitle"], "Job A")


if __name__ == "__main__":
    unittest.main()
