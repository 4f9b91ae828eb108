from django.contrib.auth.models import User
from rest_framework import status
from rest_framework.test import APITestCase

from .models import Interview


# API Test Case (Integration Tests)

class InterviewAPITestCase(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="testuser", password="password123")
        self.client.login(username="testuser", password="password123")

        self.interview = Interview.objects.create(
            user=self.user,
            company_name="Acme Corp",
            job_position="Software Engineer",
            interviewer_name="Jane Doe",
            interview_date="2024-03-10",
            priority_level="High",
        )

    def test_requires_authentication(self):
        self.client.logout()
        response = self.client.get("/api/interviews/")
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_get_interview(self):
        response = self.client.get(f"/api/interviews/{self.interview.pk}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["company_name"], "Acme Corp")
        self.assertEqual(response.data["status"], "Pending")
        self.assertEqual(response.data["user_id"], self.user.pk)

    def test_create_interview(self):
        payload = {
            "company_name": "Globex",
            "job_position": "Data Engineer",
            "interviewer_name": "Ann Roe",
            "interview_date": "2024-04-01",
            "priority_level": "Low",
        }
        response = self.client.post("/api/interviews/", payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        interview = Interview.objects.get(pk=response.data["id"])
        self.assertEqual(interview.user, self.user)
        self.assertEqual(interview.status, "Pending")

    def test_create_interview_rejects_blank_fields(self):
        payload = {
            "company_name": " ",
            "job_position": "Data Engineer",
            "interviewer_name": "Ann Roe",
            "interview_date": "not-a-date",
        }
        response = self.client.post("/api/interviews/", payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("company_name", response.data["details"])
        self.assertIn("interview_date", response.data["details"])
        self.assertEqual(Interview.objects.count(), 1)

    def test_create_interview_from_form_post(self):
        payload = {
            "csrfmiddlewaretoken": "token",
            "company_name": "Globex",
            "job_position": "Data Engineer",
            "interviewer_name": "Ann Roe",
            "interview_date": "2024-04-01",
        }
        response = self.client.post("/api/interviews/", payload, format="multipart")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Interview.objects.get(pk=response.data["id"]).company_name, "Globex")

    def test_update_interview(self):
        response = self.client.patch(f"/api/interviews/{self.interview.pk}/", {"status": "Passed"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "Passed")
        self.assertEqual(response.data["company_name"], "Acme Corp")

    def test_delete_interview(self):
        response = self.client.delete(f"/api/interviews/{self.interview.pk}/")
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Interview.objects.exists())

        response = self.client.delete(f"/api/interviews/{self.interview.pk}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_other_users_interviews_are_hidden(self):
        other = User.objects.create_user(username="other", password="password123")
        self.client.force_authenticate(user=other)
        response = self.client.get(f"/api/interviews/{self.interview.pk}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        response = self.client.get("/api/interviews/")
        self.assertEqual(response.data, [])

    def test_list_filters(self):
        Interview.objects.create(
            user=self.user, company_name="Globex", job_position="Backend Engineer",
            interviewer_name="Ann Roe", interview_date="2024-05-01",
            priority_level="High", status="Passed",
        )
        Interview.objects.create(
            user=self.user, company_name="Initech", job_position="Engineering Manager",
            interviewer_name="Bob Lee", interview_date="2024-06-01",
            priority_level="Low", status="Passed",
        )

        response = self.client.get("/api/interviews/")
        self.assertEqual(
            [i["company_name"] for i in response.data],
            ["Initech", "Globex", "Acme Corp"]
        )

        response = self.client.get("/api/interviews/", {"search": "eng", "status": "Passed", "priority": "High"})
        self.assertEqual([i["company_name"] for i in response.data], ["Globex"])

        response = self.client.get("/api/interviews/", {"search": "ACME", "status": "all", "priority": "all"})
        self.assertEqual([i["company_name"] for i in response.data], ["Acme Corp"])


class DashboardAPITestCase(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="testuser", password="password123")
        self.client.force_authenticate(user=self.user)
        for company, date, interview_status in (
            ("Acme Corp", "2024-03-10", "Pending"),
            ("Globex", "2024-01-05", "Pending"),
            ("Initech", "2024-02-01", "Passed"),
        ):
            Interview.objects.create(
                user=self.user, company_name=company, job_position="Engineer",
                interviewer_name="Jane Doe", interview_date=date, status=interview_status,
            )

    def test_dashboard(self):
        response = self.client.get("/api/dashboard/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data["stats"],
            {"total": 3, "pending": 2, "passed": 1, "failed": 0, "no_feedback": 0}
        )
        self.assertEqual(
            [i["interview_date"] for i in response.data["pending"]],
            ["2024-01-05", "2024-03-10"]
        )

    def test_dashboard_search_narrows_pending_only(self):
        response = self.client.get("/api/dashboard/", {"search": "acme"})
        self.assertEqual(response.data["stats"]["total"], 3)
        self.assertEqual([i["company_name"] for i in response.data["pending"]], ["Acme Corp"])
