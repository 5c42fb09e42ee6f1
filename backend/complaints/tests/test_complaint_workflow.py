"""
Integration tests for administrator actions on complaints: status changes
(including the implicit Assigned step and the lazy claim of unassigned
complaints), internal notes, and visibility rules.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import UserRole
from complaints.models import Complaint, ComplaintStatus, ComplaintStatusLog
from complaints.services import ComplaintQueryService, ComplaintWorkflowService, parse_status
from core.domain.exceptions import InvalidStatus, InvalidTransition, NotFound, ValidationError
from core.models import Notification

User = get_user_model()

_seq = 0


def _make_user(role: str, **fields) -> User:
    global _seq
    _seq += 1
    return User.objects.create_user(
        username=f"{role}_{_seq}",
        password="W0rkflow!Pass",
        role=role,
        **fields,
    )


def _make_complaint(citizen: User, owner: User | None = None, **fields) -> Complaint:
    """Insert a complaint directly, bypassing routing."""
    global _seq
    _seq += 1
    defaults = {
        "code": f"URBTEST{_seq:06d}",
        "category": "water",
        "description": "No water since Monday.",
        "state": "TX",
        "city": "Austin",
        "area": "Downtown",
        "status": ComplaintStatus.ASSIGNED if owner else ComplaintStatus.PENDING,
        "assigned_admin": owner,
    }
    defaults.update(fields)
    complaint = Complaint.objects.create(citizen=citizen, **defaults)
    ComplaintStatusLog.objects.create(
        complaint=complaint,
        from_status="",
        to_status=complaint.status,
        changed_by=owner or citizen,
    )
    return complaint


def _statuses(complaint: Complaint) -> list[str]:
    return list(complaint.status_logs.order_by("created_at", "id").values_list("to_status", flat=True))


class TestParseStatus(TestCase):

    def test_accepts_values_and_labels(self):
        self.assertEqual(parse_status("in_progress"), ComplaintStatus.IN_PROGRESS)
        self.assertEqual(parse_status("In Progress"), ComplaintStatus.IN_PROGRESS)
        self.assertEqual(parse_status("RESOLVED"), ComplaintStatus.RESOLVED)
        self.assertEqual(parse_status("InProgress"), ComplaintStatus.IN_PROGRESS)
        self.assertEqual(parse_status("in-progress"), ComplaintStatus.IN_PROGRESS)

    def test_rejects_unknown(self):
        with self.assertRaises(InvalidStatus):
            parse_status("closed")
        with self.assertRaises(InvalidStatus):
            parse_status("")


class TestUpdateStatus(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = _make_user(UserRole.ADMINISTRATOR, state="TX", city="Austin", area="Downtown")
        cls.other_admin = _make_user(UserRole.ADMINISTRATOR, state="TX", city="Dallas", area="Uptown")
        cls.citizen = _make_user(UserRole.CITIZEN)

    def test_in_progress_notifies_citizen(self):
        complaint = _make_complaint(self.citizen, owner=self.admin)

        with self.captureOnCommitCallbacks(execute=True):
            result = ComplaintWorkflowService.update_status(complaint.code, self.admin, "in_progress")

        self.assertEqual(result.status, ComplaintStatus.IN_PROGRESS)
        note = Notification.objects.get(recipient=self.citizen)
        self.assertEqual(note.kind, "complaint_in_progress")
        self.assertEqual(note.title, "Complaint In Progress")
        self.assertEqual(
            note.message,
            f"Your complaint {complaint.code} is now being worked on. Status: In Progress",
        )

    def test_pending_to_resolved_records_implicit_assigned(self):
        complaint = _make_complaint(self.citizen, owner=None)

        with self.captureOnCommitCallbacks(execute=True):
            ComplaintWorkflowService.update_status(complaint.code, self.admin, "Resolved")

        complaint.refresh_from_db()
        self.assertEqual(complaint.status, ComplaintStatus.RESOLVED)
        self.assertEqual(complaint.assigned_admin, self.admin)
        self.assertEqual(
            _statuses(complaint),
            [ComplaintStatus.PENDING, ComplaintStatus.ASSIGNED, ComplaintStatus.RESOLVED],
        )
        kinds = list(Notification.objects.filter(recipient=self.citizen).values_list("kind", flat=True))
        self.assertEqual(kinds, ["complaint_resolved"])

    def test_owner_admin_pending_to_in_progress_also_steps_through_assigned(self):
        complaint = _make_complaint(self.citizen, owner=self.admin, status=ComplaintStatus.PENDING)

        ComplaintWorkflowService.update_status(complaint.code, self.admin, "in_progress")

        self.assertEqual(
            _statuses(complaint)[-2:],
            [ComplaintStatus.ASSIGNED, ComplaintStatus.IN_PROGRESS],
        )

    def test_same_status_is_a_no_op(self):
        complaint = _make_complaint(self.citizen, owner=self.admin, status=ComplaintStatus.IN_PROGRESS)
        before = complaint.status_logs.count()

        with self.captureOnCommitCallbacks(execute=True):
            ComplaintWorkflowService.update_status(complaint.code, self.admin, "in_progress")
            ComplaintWorkflowService.update_status(complaint.code, self.admin, "In Progress")

        self.assertEqual(complaint.status_logs.count(), before)
        self.assertFalse(Notification.objects.filter(recipient=self.citizen).exists())

    def test_moving_back_to_assigned_is_silent(self):
        complaint = _make_complaint(self.citizen, owner=self.admin, status=ComplaintStatus.IN_PROGRESS)

        with self.captureOnCommitCallbacks(execute=True):
            ComplaintWorkflowService.update_status(complaint.code, self.admin, "assigned")

        complaint.refresh_from_db()
        self.assertEqual(complaint.status, ComplaintStatus.ASSIGNED)
        self.assertFalse(Notification.objects.filter(recipient=self.citizen).exists())

    def test_resolved_is_terminal(self):
        complaint = _make_complaint(self.citizen, owner=self.admin, status=ComplaintStatus.RESOLVED)

        with self.assertRaises(InvalidTransition):
            ComplaintWorkflowService.update_status(complaint.code, self.admin, "in_progress")

        complaint.refresh_from_db()
        self.assertEqual(complaint.status, ComplaintStatus.RESOLVED)

    def test_last_history_entry_matches_status(self):
        complaint = _make_complaint(self.citizen, owner=self.admin)
        for target in ("in_progress", "assigned", "in_progress", "resolved"):
            ComplaintWorkflowService.update_status(complaint.code, self.admin, target)
            complaint.refresh_from_db()
            self.assertEqual(_statuses(complaint)[-1], complaint.status)

    def test_unknown_status(self):
        complaint = _make_complaint(self.citizen, owner=self.admin)
        with self.assertRaises(InvalidStatus):
            ComplaintWorkflowService.update_status(complaint.code, self.admin, "archived")

    def test_missing_complaint(self):
        with self.assertRaises(NotFound):
            ComplaintWorkflowService.update_status("URB000", self.admin, "resolved")

    def test_other_owner_is_reported_as_not_found(self):
        complaint = _make_complaint(self.citizen, owner=self.admin)

        with self.assertRaises(NotFound):
            ComplaintWorkflowService.update_status(complaint.code, self.other_admin, "resolved")

        complaint.refresh_from_db()
        self.assertEqual(complaint.status, ComplaintStatus.ASSIGNED)


class TestLazyClaim(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.local_admin = _make_user(UserRole.ADMINISTRATOR, state="TX", city="Austin", area="Downtown")
        cls.far_admin = _make_user(UserRole.ADMINISTRATOR, state="CA", city="Fresno", area="Tower")
        cls.citizen = _make_user(UserRole.CITIZEN)

    def test_claim_through_status_update(self):
        complaint = _make_complaint(self.citizen, owner=None)

        ComplaintWorkflowService.update_status(complaint.code, self.local_admin, "assigned")

        complaint.refresh_from_db()
        self.assertEqual(complaint.assigned_admin, self.local_admin)
        self.assertEqual(complaint.status, ComplaintStatus.ASSIGNED)
        last = complaint.status_logs.order_by("-created_at", "-id").first()
        self.assertEqual(last.changed_by, self.local_admin)

    def test_claim_outside_jurisdiction_changes_nothing(self):
        complaint = _make_complaint(self.citizen, owner=None)
        version = complaint.version

        with self.assertRaises(NotFound):
            ComplaintWorkflowService.update_status(complaint.code, self.far_admin, "in_progress")

        complaint.refresh_from_db()
        self.assertIsNone(complaint.assigned_admin)
        self.assertEqual(complaint.status, ComplaintStatus.PENDING)
        self.assertEqual(complaint.version, version)
        self.assertEqual(complaint.status_logs.count(), 1)

    def test_claim_is_silent(self):
        complaint = _make_complaint(self.citizen, owner=None)

        with self.captureOnCommitCallbacks(execute=True):
            ComplaintWorkflowService.add_note(complaint.code, self.local_admin, "Crew scheduled.")

        complaint.refresh_from_db()
        self.assertEqual(complaint.assigned_admin, self.local_admin)
        self.assertEqual(complaint.status, ComplaintStatus.ASSIGNED)
        self.assertFalse(Notification.objects.filter(recipient=self.citizen).exists())


class TestAddNote(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = _make_user(UserRole.ADMINISTRATOR, city="Austin", area="Downtown")
        cls.other_admin = _make_user(UserRole.ADMINISTRATOR, city="Austin", area="Downtown")
        cls.citizen = _make_user(UserRole.CITIZEN)

    def test_returns_running_count(self):
        complaint = _make_complaint(self.citizen, owner=self.admin)
        self.assertEqual(ComplaintWorkflowService.add_note(complaint.code, self.admin, "first"), 1)
        self.assertEqual(ComplaintWorkflowService.add_note(complaint.code, self.admin, "second"), 2)

    def test_blank_note_rejected(self):
        complaint = _make_complaint(self.citizen, owner=self.admin)
        with self.assertRaises(ValidationError):
            ComplaintWorkflowService.add_note(complaint.code, self.admin, "   ")

    def test_not_owner(self):
        complaint = _make_complaint(self.citizen, owner=self.admin)
        with self.assertRaises(NotFound):
            ComplaintWorkflowService.add_note(complaint.code, self.other_admin, "mine now")
        self.assertEqual(complaint.notes.count(), 0)


class TestWorkflowEndpoints(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = _make_user(UserRole.ADMINISTRATOR, state="TX", city="Austin", area="Downtown")
        cls.other_admin = _make_user(UserRole.ADMINISTRATOR, state="TX", city="Dallas", area="Uptown")
        cls.citizen = _make_user(UserRole.CITIZEN)
        cls.stranger = _make_user(UserRole.CITIZEN)

    def setUp(self):
        self.client = APIClient()

    def login_as(self, user: User) -> None:
        token = AccessToken.for_user(user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

    def test_status_endpoint(self):
        complaint = _make_complaint(self.citizen, owner=self.admin)
        self.login_as(self.admin)
        url = reverse("complaint-update-status", kwargs={"code": complaint.code})

        resp = self.client.post(url, {"status": "In Progress"}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertEqual(resp.data, {"code": complaint.code, "status": "in_progress"})

    def test_status_endpoint_errors(self):
        complaint = _make_complaint(self.citizen, owner=self.admin, status=ComplaintStatus.RESOLVED)
        url = reverse("complaint-update-status", kwargs={"code": complaint.code})

        self.login_as(self.admin)
        self.assertEqual(
            self.client.post(url, {"status": "bogus"}, format="json").status_code,
            status.HTTP_400_BAD_REQUEST,
        )
        self.assertEqual(
            self.client.post(url, {"status": "in_progress"}, format="json").status_code,
            status.HTTP_409_CONFLICT,
        )

        self.login_as(self.other_admin)
        self.assertEqual(
            self.client.post(url, {"status": "in_progress"}, format="json").status_code,
            status.HTTP_404_NOT_FOUND,
        )

        self.login_as(self.citizen)
        self.assertEqual(
            self.client.post(url, {"status": "in_progress"}, format="json").status_code,
            status.HTTP_403_FORBIDDEN,
        )

    def test_note_endpoint(self):
        complaint = _make_complaint(self.citizen, owner=self.admin)
        self.login_as(self.admin)
        url = reverse("complaint-add-note", kwargs={"code": complaint.code})

        resp = self.client.post(url, {"text": "Called the utility."}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, msg=resp.data)
        self.assertEqual(resp.data["note_count"], 1)

    def test_list_scoping(self):
        mine = _make_complaint(self.citizen, owner=self.admin)
        claimable = _make_complaint(self.citizen, owner=None)
        elsewhere = _make_complaint(self.citizen, owner=None, city="Fresno", area="Tower")
        theirs = _make_complaint(self.citizen, owner=self.other_admin)
        url = reverse("complaint-list")

        self.login_as(self.admin)
        codes = {row["code"] for row in self.client.get(url).data}
        self.assertEqual(codes, {mine.code, claimable.code})

        self.login_as(self.citizen)
        codes = {row["code"] for row in self.client.get(url).data}
        self.assertEqual(codes, {mine.code, claimable.code, elsewhere.code, theirs.code})

        self.login_as(self.stranger)
        self.assertEqual(self.client.get(url).data, [])

    def test_list_status_filter(self):
        _make_complaint(self.citizen, owner=self.admin)
        done = _make_complaint(self.citizen, owner=self.admin, status=ComplaintStatus.RESOLVED)
        self.login_as(self.admin)

        resp = self.client.get(reverse("complaint-list"), {"status": "resolved"})

        self.assertEqual([row["code"] for row in resp.data], [done.code])

    def test_detail_shows_notes_to_admins_only(self):
        complaint = _make_complaint(self.citizen, owner=self.admin)
        ComplaintWorkflowService.add_note(complaint.code, self.admin, "internal")
        url = reverse("complaint-detail", kwargs={"code": complaint.code})

        self.login_as(self.admin)
        resp = self.client.get(url)
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(len(resp.data["notes"]), 1)

        self.login_as(self.citizen)
        resp = self.client.get(url)
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertNotIn("notes", resp.data)
        self.assertEqual(len(resp.data["status_history"]), 1)

        self.login_as(self.stranger)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_404_NOT_FOUND)

    def test_history_endpoint(self):
        complaint = _make_complaint(self.citizen, owner=None)
        ComplaintWorkflowService.update_status(complaint.code, self.admin, "resolved")
        self.login_as(self.citizen)

        resp = self.client.get(reverse("complaint-history", kwargs={"code": complaint.code}))

        self.assertEqual(
            [row["to_status"] for row in resp.data],
            ["pending", "assigned", "resolved"],
        )


class TestAdministratorVisibility(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.citizen = _make_user(UserRole.CITIZEN)
        cls.shouting_admin = _make_user(UserRole.ADMINISTRATOR, city="AUSTIN ", area="downtown")
        cls.cityless_admin = _make_user(UserRole.ADMINISTRATOR, area="Downtown")

    def test_unassigned_complaints_match_city_case_insensitively(self):
        near = _make_complaint(self.citizen, owner=None)
        _make_complaint(self.citizen, owner=None, city="Dallas")

        visible = ComplaintQueryService.visible_queryset(self.shouting_admin)

        self.assertEqual(list(visible.values_list("code", flat=True)), [near.code])

    def test_administrator_without_city_sees_only_owned(self):
        owned = _make_complaint(self.citizen, owner=self.cityless_admin)
        _make_complaint(self.citizen, owner=None)

        visible = ComplaintQueryService.visible_queryset(self.cityless_admin)

        self.assertEqual(list(visible.values_list("code", flat=True)), [owned.code])
