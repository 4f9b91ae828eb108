import datetime
from unittest import mock

from django.contrib.auth.models import User
from django.db import DatabaseError
from django.test import TestCase

from .errors import AuthError, BackendError, NotFoundError
from .models import Interview
from .session import AuthSession
from .store import DjangoRecordStore

DOCUMENT = {
    "company_name": "Acme Corp",
    "job_position": "Engineer",
    "interviewer_name": "Jane Doe",
    "interview_date": datetime.date(2024, 3, 10),
    "priority_level": "High",
    "status": "Pending",
}


class DjangoRecordStoreTestCase(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="testuser", password="password123")
        self.other = User.objects.create_user(username="other", password="password123")
        self.store = DjangoRecordStore(AuthSession(self.user))

    def test_signed_out_session_is_refused(self):
        store = DjangoRecordStore(AuthSession())
        with self.assertRaises(AuthError):
            store.query("interviews", {"user_id": self.user.pk})
        with self.assertRaises(AuthError):
            store.insert("interviews", {**DOCUMENT, "user_id": self.user.pk})

    def test_queries_must_be_owner_scoped(self):
        with self.assertRaises(AuthError):
            self.store.query("interviews", {})
        with self.assertRaises(AuthError):
            self.store.query("interviews", {"user_id": self.other.pk})
        handle = self.store.query("interviews", {"user_id": str(self.user.pk)}, "-interview_date")
        self.assertEqual(handle.order_by, "-interview_date")

    def test_unknown_collection(self):
        with self.assertRaises(BackendError):
            self.store.query("resumes", {"user_id": self.user.pk})

    def test_insert_for_someone_else_is_refused(self):
        with self.assertRaises(AuthError):
            self.store.insert("interviews", {**DOCUMENT, "user_id": self.other.pk})
        self.assertFalse(Interview.objects.exists())

    def test_store_rejects_values_outside_the_enumerations(self):
        with self.assertRaises(BackendError):
            self.store.insert("interviews", {**DOCUMENT, "status": "Ghosted", "user_id": self.user.pk})
        self.assertFalse(Interview.objects.exists())

    def test_owner_cannot_change(self):
        document_id = self.store.insert("interviews", {**DOCUMENT, "user_id": self.user.pk})
        with self.assertRaises(AuthError):
            self.store.update("interviews", document_id, {"user_id": self.other.pk})
        self.assertEqual(Interview.objects.get(pk=document_id).user, self.user)

    def test_subscription_survives_a_failed_delivery(self):
        handle = self.store.query("interviews", {"user_id": self.user.pk})
        deliveries = []
        unsubscribe = self.store.subscribe(handle, lambda documents, error: deliveries.append((documents, error)))

        with mock.patch.object(self.store, "fetch", side_effect=BackendError("connection reset")):
            self.store.insert("interviews", {**DOCUMENT, "user_id": self.user.pk})
        documents, error = deliveries[-1]
        self.assertIsNone(documents)
        self.assertIsInstance(error, BackendError)

        self.store.insert("interviews", {**DOCUMENT, "user_id": self.user.pk})
        documents, error = deliveries[-1]
        self.assertIsNone(error)
        self.assertEqual(len(documents), 2)
        unsubscribe()
        unsubscribe()

    def test_failed_first_delivery_disconnects_receivers(self):
        handle = self.store.query("interviews", {"user_id": self.user.pk})
        calls = []

        def on_snapshot(documents, error):
            calls.append(documents)
            raise RuntimeError("listener failed")

        with self.assertRaises(RuntimeError):
            self.store.subscribe(handle, on_snapshot)

        self.store.insert("interviews", {**DOCUMENT, "user_id": self.user.pk})
        self.assertEqual(calls, [[]])

    def test_update_with_unknown_fields_is_rejected(self):
        document_id = self.store.insert("interviews", {**DOCUMENT, "user_id": self.user.pk})
        for patch in ({"salary": 100000}, {"id": "replacement"}):
            with self.assertRaises(BackendError):
                self.store.update("interviews", document_id, patch)
        self.assertEqual(Interview.objects.get(pk=document_id).company_name, "Acme Corp")

    def test_database_errors_become_backend_errors(self):
        document_id = self.store.insert("interviews", {**DOCUMENT, "user_id": self.user.pk})
        with mock.patch.object(Interview, "delete", side_effect=DatabaseError("disk I/O error")):
            with self.assertRaises(BackendError) as ctx:
                self.store.remove("interviews", document_id)
        self.assertNotIsInstance(ctx.exception, NotFoundError)
        self.assertTrue(Interview.objects.filter(pk=document_id).exists())
