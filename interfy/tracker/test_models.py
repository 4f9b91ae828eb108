import datetime
import uuid

from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.test import TestCase

from .models import Interview


class InterviewModelTestCase(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="testuser", password="password123")

        self.interview = Interview.objects.create(
            user=self.user,
            company_name="Acme Corp",
            job_position="Software Engineer",
            interviewer_name="Jane Doe",
            interview_date=datetime.date(2024, 3, 10),
        )

    def test_interview_creation(self):
        interview = Interview.objects.get(pk=self.interview.pk)
        self.assertEqual(interview.user.username, "testuser")
        self.assertEqual(interview.company_name, "Acme Corp")
        self.assertIsInstance(interview.pk, uuid.UUID)
        self.assertEqual(interview.status, "Pending")
        self.assertEqual(interview.priority_level, "Medium")
        self.assertIsNotNone(interview.created_at)
        self.assertIsNotNone(interview.updated_at)

    def test_updated_at_refreshes_on_save(self):
        created = self.interview.updated_at
        self.interview.status = "Passed"
        self.interview.save()
        self.interview.refresh_from_db()
        self.assertGreaterEqual(self.interview.updated_at, created)
        self.assertEqual(self.interview.created_at, Interview.objects.get(pk=self.interview.pk).created_at)

    def test_status_must_be_known(self):
        self.interview.status = "Ghosted"
        with self.assertRaises(ValidationError):
            self.interview.full_clean()

    def test_str(self):
        self.assertEqual(str(self.interview), "Interview with Acme Corp for Software Engineer (Pending)")

    def test_deleting_user_removes_interviews(self):
        self.user.delete()
        self.assertFalse(Interview.objects.exists())
