import json
import shutil
import tempfile
from unittest import mock

from django.contrib.auth.models import User
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import DatabaseError
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APITestCase

from tracker.errors import AccountDeletionError, BackendError
from tracker.models import Interview

from .models import Profile
from .services import delete_account

MEDIA_ROOT = tempfile.mkdtemp()


def image_file(name="avatar.png"):
    return SimpleUploadedFile(name, b"\x89PNG\r\n\x1a\n fake image", content_type="image/png")


def create_interview(user, company="Acme Corp"):
    return Interview.objects.create(
        user=user, company_name=company, job_position="Engineer",
        interviewer_name="Jane Doe", interview_date="2024-03-10",
    )


class ProfileModelTestCase(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username="testuser", password="password123", email="test@example.com"
        )

    def test_profile_created_on_first_login(self):
        self.assertFalse(Profile.objects.filter(user=self.user).exists())
        self.client.login(username="testuser", password="password123")
        self.client.logout()
        self.client.login(username="testuser", password="password123")
        self.assertEqual(Profile.objects.filter(user=self.user).count(), 1)

    def test_unset_fields_are_none(self):
        profile = Profile.for_user(self.user)
        self.assertEqual(profile.email, "test@example.com")
        self.assertIsNone(profile.full_name)
        self.assertIsNone(profile.professional_title)
        self.assertFalse(profile.onboarding_completed)
        self.assertEqual(Profile.for_user(self.user).pk, profile.pk)
        self.assertEqual(Profile.objects.count(), 1)


@override_settings(MEDIA_ROOT=MEDIA_ROOT)
class ProfileAPITestCase(APITestCase):
    @classmethod
    def tearDownClass(cls):
        super().tearDownClass()
        shutil.rmtree(MEDIA_ROOT, ignore_errors=True)

    def setUp(self):
        self.user = User.objects.create_user(
            username="testuser", password="password123", email="test@example.com",
            first_name="Test", last_name="User",
        )
        self.client.force_authenticate(user=self.user)

    def test_get_profile_bootstraps_it(self):
        response = self.client.get("/api/profile/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["email"], "test@example.com")
        self.assertEqual(response.data["full_name"], "Test User")
        self.assertIsNone(response.data["avatar_url"])

    def test_update_distinguishes_cleared_from_unset(self):
        response = self.client.patch(
            "/api/profile/", {"professional_title": "", "employment_status": "Employed"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        profile = Profile.objects.get(user=self.user)
        self.assertEqual(profile.professional_title, "")
        self.assertEqual(profile.employment_status, "Employed")

        self.client.patch("/api/profile/", {"employment_status": None}, format="json")
        profile.refresh_from_db()
        self.assertIsNone(profile.employment_status)

    def test_email_is_read_only(self):
        self.client.patch("/api/profile/", {"email": "other@example.com"}, format="json")
        self.assertEqual(Profile.objects.get(user=self.user).email, "test@example.com")

    def test_avatar_upload(self):
        response = self.client.post("/api/profile/avatar/", {"file": image_file()}, format="multipart")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["avatar_url"].startswith("http://testserver/media/avatars/"))
        profile = Profile.objects.get(user=self.user)
        self.assertTrue(profile.avatar.name.startswith(f"avatars/{self.user.pk}-"))

    def test_cover_upload_replaces_previous_file(self):
        self.client.post("/api/profile/cover/", {"file": image_file("one.png")}, format="multipart")
        first = Profile.objects.get(user=self.user).cover_photo.name
        self.client.post("/api/profile/cover/", {"file": image_file("two.png")}, format="multipart")
        second = Profile.objects.get(user=self.user).cover_photo.name
        self.assertNotEqual(first, second)
        self.assertFalse(default_storage.exists(first))
        self.assertTrue(default_storage.exists(second))

    def test_failed_upload_keeps_previous_avatar(self):
        self.client.post("/api/profile/avatar/", {"file": image_file("a.png")}, format="multipart")
        previous = Profile.objects.get(user=self.user).avatar.name

        with mock.patch("django.core.files.storage.FileSystemStorage._save", side_effect=OSError("disk full")):
            response = self.client.post("/api/profile/avatar/", {"file": image_file("b.png")}, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(Profile.objects.get(user=self.user).avatar.name, previous)
        self.assertTrue(default_storage.exists(previous))

    def test_upload_rejects_non_images(self):
        upload = SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")
        response = self.client.post("/api/profile/avatar/", {"file": upload}, format="multipart")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.post("/api/profile/avatar/", {}, format="multipart")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_onboarding_requires_terms(self):
        response = self.client.post("/api/profile/onboarding/", {"terms_accepted": False}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post("/api/profile/onboarding/", {"terms_accepted": True}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["terms_accepted"])
        self.assertTrue(response.data["onboarding_completed"])
        self.assertIsNotNone(response.data["terms_accepted_at"])

    def test_export(self):
        create_interview(self.user)
        create_interview(self.user, company="Globex")
        response = self.client.get("/api/profile/export/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("attachment; filename=\"interfy-export-", response["Content-Disposition"])
        data = json.loads(response.content)
        self.assertEqual(data["total_interviews"], 2)
        self.assertEqual(data["profile"]["email"], "test@example.com")
        self.assertEqual({i["company_name"] for i in data["interviews"]}, {"Acme Corp", "Globex"})
        self.assertIn("export_date", data)

    def test_delete_account(self):
        create_interview(self.user)
        self.client.post("/api/profile/avatar/", {"file": image_file()}, format="multipart")
        avatar = Profile.objects.get(user=self.user).avatar.name

        response = self.client.delete("/api/profile/")
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(User.objects.filter(pk=self.user.pk).exists())
        self.assertFalse(Interview.objects.exists())
        self.assertFalse(Profile.objects.exists())
        self.assertFalse(default_storage.exists(avatar))


@override_settings(MEDIA_ROOT=MEDIA_ROOT)
class AccountDeletionTestCase(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="testuser", password="password123")
        create_interview(self.user)
        self.profile = Profile.for_user(self.user)
        self.profile.avatar.save("avatar.png", image_file(), save=True)

    def test_partial_failure_is_reported(self):
        with mock.patch("profiles.services._delete_records", side_effect=DatabaseError("database is locked")):
            with self.assertRaises(AccountDeletionError) as ctx:
                delete_account(self.user)
        self.assertEqual(ctx.exception.removed_files, [self.profile.avatar.name])
        self.assertTrue(Interview.objects.filter(user=self.user).exists())

    def test_image_failure_leaves_everything(self):
        with mock.patch.object(default_storage, "delete", side_effect=OSError("read-only file system")):
            with self.assertRaises(BackendError) as ctx:
                delete_account(self.user)
        self.assertNotIsInstance(ctx.exception, AccountDeletionError)
        self.assertTrue(User.objects.filter(pk=self.user.pk).exists())
        self.assertTrue(Interview.objects.filter(user=self.user).exists())
