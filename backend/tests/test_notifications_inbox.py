"""
Tests for the notification inbox endpoints and for delivery failures
never leaking into the operation that emitted the notifications.
"""

from __future__ import annotations

from unittest import mock

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import UserRole
from complaints.models import Complaint
from complaints.services import ComplaintCreationService
from core.models import Notification

User = get_user_model()


class TestNotificationInbox(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.user = User.objects.create_user(username="inbox_owner", password="Inb0x!Pass")
        cls.other = User.objects.create_user(username="inbox_other", password="Inb0x!Pass")

        def _note(recipient, kind, category, is_read=False):
            return Notification.objects.create(
                recipient=recipient,
                kind=kind,
                category=category,
                title=kind.replace("_", " ").title(),
                message=f"{kind} happened",
                is_read=is_read,
            )

        cls.submitted = _note(cls.user, "complaint_submitted", "complaint", is_read=True)
        cls.assigned = _note(cls.user, "complaint_assigned", "complaint")
        cls.alert = _note(cls.user, "alert_urgent", "alert")
        cls.foreign = _note(cls.other, "complaint_submitted", "complaint")

    def setUp(self):
        self.client = APIClient()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(self.user)}")
        self.list_url = reverse("core:notification-list")

    def test_list_returns_own_notifications_newest_first(self):
        resp = self.client.get(self.list_url)

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        ids = [row["id"] for row in resp.data["results"]]
        self.assertEqual(ids, [self.alert.pk, self.assigned.pk, self.submitted.pk])
        self.assertEqual(resp.data["unread_count"], 2)

    def test_filters(self):
        resp = self.client.get(self.list_url, {"category": "alert"})
        self.assertEqual([row["id"] for row in resp.data["results"]], [self.alert.pk])

        resp = self.client.get(self.list_url, {"is_read": "true"})
        self.assertEqual([row["id"] for row in resp.data["results"]], [self.submitted.pk])

        resp = self.client.get(self.list_url, {"limit": 1, "offset": 1})
        self.assertEqual([row["id"] for row in resp.data["results"]], [self.assigned.pk])

    def test_mark_one_as_read(self):
        url = reverse("core:notification-mark-as-read", kwargs={"pk": self.assigned.pk})

        resp = self.client.post(url)

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertTrue(resp.data["is_read"])
        self.assigned.refresh_from_db()
        self.assertIsNotNone(self.assigned.read_at)

    def test_cannot_touch_someone_elses_notification(self):
        url = reverse("core:notification-mark-as-read", kwargs={"pk": self.foreign.pk})

        resp = self.client.post(url)

        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.foreign.refresh_from_db()
        self.assertFalse(self.foreign.is_read)

    def test_mark_all_as_read(self):
        resp = self.client.post(reverse("core:notification-mark-all-as-read"))

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["updated"], 2)
        self.assertFalse(Notification.objects.filter(recipient=self.user, is_read=False).exists())
        self.assertTrue(Notification.objects.filter(recipient=self.other, is_read=False).exists())


class TestDeliveryFailure(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = User.objects.create_user(
            username="delivery_admin", password="pass", role=UserRole.ADMINISTRATOR,
            state="TX", city="Austin", area="Downtown",
        )
        cls.citizen = User.objects.create_user(username="delivery_citizen", password="pass")

    def test_failed_delivery_is_logged_not_raised(self):
        payload = {
            "category": "drainage",
            "description": "Storm drain blocked.",
            "state": "TX",
            "city": "Austin",
            "area": "Downtown",
        }
        with mock.patch.object(
            Notification.objects, "bulk_create", side_effect=DatabaseError("disk full"),
        ):
            with self.assertLogs("core.domain.notifications", level="ERROR") as logs:
                with self.captureOnCommitCallbacks(execute=True):
                    complaint = ComplaintCreationService.create_complaint(self.citizen, payload)

        self.assertTrue(Complaint.objects.filter(pk=complaint.pk).exists())
        self.assertEqual(complaint.assigned_admin, self.admin)
        self.assertFalse(Notification.objects.exists())
        self.assertIn("Failed to deliver 2 notification(s)", logs.output[0])
