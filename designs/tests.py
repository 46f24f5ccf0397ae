import json
from unittest import TestCase
from unittest.mock import patch

from django.contrib.auth.models import AnonymousUser
from django.test import TestCase as DjangoTestCase, override_settings
from django.urls import reverse

from accounts.models import CustomUser, Profile
from common.errors import (
    AuthError,
    InsufficientRoleError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from designs import config, services
from designs.models import Design, DesignStatusHistory


def make_user(email, role=None):
    user = CustomUser.objects.create_user(email=email, password="pass12345")
    if role:
        Profile.objects.create(user=user, email=email, first_name=email.split("@")[0], role=role)
    return user


class SubmissionValidationTests(TestCase):
    def _validate(self, **overrides):
        fields = {"name": "Portfolio", "type": "website", "pages_count": 3}
        fields.update(overrides)
        return services.validate_submission(**fields)

    def test_valid_submission_is_cleaned(self):
        cleaned = self._validate(name="  Portfolio  ", figma_link=" https://www.figma.com/file/abc ", description="")
        self.assertEqual(cleaned["name"], "Portfolio")
        self.assertEqual(cleaned["figma_link"], "https://www.figma.com/file/abc")
        self.assertIsNone(cleaned["description"])

    def test_blank_name_rejected(self):
        with self.assertRaises(ValidationError):
            self._validate(name="   ")

    def test_unknown_type_rejected(self):
        with self.assertRaises(ValidationError):
            self._validate(type="mobile_app")

    def test_pages_count_must_be_positive_whole_number(self):
        for value in (0, -1, "abc", None, True, 2.5):
            with self.subTest(value=value):
                with self.assertRaises(ValidationError):
                    self._validate(type="web_application", pages_count=value)

    def test_numeric_string_pages_count_accepted(self):
        self.assertEqual(self._validate(pages_count="4")["pages_count"], 4)

    @override_settings(DESIGN_ENFORCE_PAGE_RULES=True)
    def test_website_needs_three_pages(self):
        with self.assertRaises(ValidationError):
            self._validate(type="website", pages_count=2)

    @override_settings(DESIGN_ENFORCE_PAGE_RULES=True)
    def test_landing_page_has_exactly_one_page(self):
        self.assertEqual(self._validate(type="landing_page", pages_count=1)["pages_count"], 1)
        with self.assertRaises(ValidationError):
            self._validate(type="landing_page", pages_count=2)

    @override_settings(DESIGN_ENFORCE_PAGE_RULES=False)
    def test_page_rules_can_be_switched_off(self):
        self.assertEqual(self._validate(type="website", pages_count=2)["pages_count"], 2)

    def test_figma_link_must_point_to_figma(self):
        with self.assertRaises(ValidationError):
            self._validate(figma_link="https://example.com/file/abc")
        with self.assertRaises(ValidationError):
            self._validate(figma_link="ftp://figma.com/file/abc")

    def test_over_long_name_and_figma_link_rejected(self):
        self.assertEqual(len(self._validate(name="x" * 200)["name"]), 200)
        with self.assertRaises(ValidationError):
            self._validate(name="x" * 201)
        with self.assertRaises(ValidationError):
            self._validate(figma_link="https://www.figma.com/file/" + "a" * 500)

    def test_non_text_optional_fields_rejected(self):
        with self.assertRaises(ValidationError):
            self._validate(figma_link=42)
        with self.assertRaises(ValidationError):
            self._validate(description=["long", "text"])
        with self.assertRaises(ValidationError):
            self._validate(type=["website"])

    def test_terminal_transitions_have_no_outgoing_edges(self):
        sources = {source for source, _, _ in config.TRANSITIONS.values()}
        for status in config.TERMINAL_STATUSES:
            self.assertNotIn(status, sources)


@override_settings(DESIGN_ENFORCE_PAGE_RULES=True)
class DesignLifecycleTests(DjangoTestCase):
    def setUp(self):
        self.owner = make_user("owner@example.com")
        self.reviewer = make_user("reviewer@example.com", role="admin")
        self.mentor = make_user("mentor@example.com", role="mentor")
        self.student = make_user("student@example.com", role="student")

    def _submit(self, user=None, **overrides):
        fields = {"name": "Bakery site", "type": "website", "pages_count": 3}
        fields.update(overrides)
        return services.submit_design(user or self.owner, **fields)

    def _statuses(self, design):
        return list(DesignStatusHistory.objects.filter(design=design).values_list("status", flat=True))

    def test_submit_creates_pending_design_and_profile(self):
        self.assertFalse(Profile.objects.filter(user=self.owner).exists())
        design = self._submit()

        profile = Profile.objects.get(user=self.owner)
        self.assertEqual(profile.role, "student")
        self.assertEqual(design.owner_id, profile.pk)
        self.assertEqual(design.status, "pending")
        entries = list(design.status_history.all())
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].status, "pending")
        self.assertEqual(entries[0].notes, config.SUBMITTED_NOTE)

    def test_two_page_website_stores_nothing(self):
        with self.assertRaises(ValidationError):
            self._submit(pages_count=2)
        self.assertEqual(Design.objects.count(), 0)
        self.assertEqual(DesignStatusHistory.objects.count(), 0)

    def test_submit_requires_identity(self):
        with self.assertRaises(AuthError):
            self._submit(user=AnonymousUser())

    def test_full_lifecycle_stamps_and_history(self):
        design = self._submit()
        design = services.accept_design(self.reviewer, design.id, notes="Looks great")
        self.assertEqual(design.status, "accepted")
        self.assertEqual(design.admin_notes, "Looks great")
        self.assertIsNotNone(design.accepted_at)

        design = services.start_development(self.mentor, design.id)
        self.assertEqual(design.status, "in_development")
        self.assertIsNone(design.admin_notes)
        self.assertIsNotNone(design.development_started_at)

        design = services.complete_development(self.reviewer, design.id, notes="Shipped")
        self.assertEqual(design.status, "completed")
        self.assertIsNotNone(design.completed_at)
        self.assertEqual(self._statuses(design), ["pending", "accepted", "in_development", "completed"])

        last = design.status_history.order_by("-created_at", "-id").first()
        self.assertEqual(last.changed_by_id, self.reviewer.pk)
        self.assertEqual(last.notes, "Shipped")

    def test_student_cannot_transition(self):
        design = self._submit()
        with self.assertRaises(InsufficientRoleError):
            services.accept_design(self.student, design.id)
        design.refresh_from_db()
        self.assertEqual(design.status, "pending")
        self.assertEqual(self._statuses(design), ["pending"])

    def test_user_without_profile_cannot_transition(self):
        design = self._submit()
        outsider = make_user("outsider@example.com")
        with self.assertRaises(InsufficientRoleError):
            services.reject_design(outsider, design.id)

    def test_rejected_design_cannot_be_accepted(self):
        design = self._submit()
        services.reject_design(self.reviewer, design.id, notes="Out of scope")
        with self.assertRaises(InvalidTransitionError):
            services.accept_design(self.reviewer, design.id)
        design.refresh_from_db()
        self.assertEqual(design.status, "rejected")
        self.assertEqual(self._statuses(design), ["pending", "rejected"])

    def test_completed_design_is_terminal(self):
        design = self._submit()
        services.accept_design(self.reviewer, design.id)
        services.start_development(self.reviewer, design.id)
        services.complete_development(self.reviewer, design.id)
        for action in config.TRANSITIONS:
            with self.subTest(action=action):
                with self.assertRaises(InvalidTransitionError):
                    services.transition_design(self.reviewer, design.id, action)

    def test_cannot_skip_states(self):
        design = self._submit()
        with self.assertRaises(InvalidTransitionError):
            services.start_development(self.reviewer, design.id)
        with self.assertRaises(InvalidTransitionError):
            services.complete_development(self.reviewer, design.id)

    def test_unknown_action_and_missing_design(self):
        design = self._submit()
        with self.assertRaises(InvalidTransitionError):
            services.transition_design(self.reviewer, design.id, "publish")
        with self.assertRaises(NotFoundError):
            services.accept_design(self.reviewer, design.id + 1000)

    def test_transition_loses_race_when_status_changed_underneath(self):
        design = self._submit()
        stale = Design.objects.get(id=design.id)
        Design.objects.filter(id=design.id).update(status="accepted")
        real_filter = Design.objects.filter

        class StaleQuery:
            def first(self):
                return stale

        def filter_returning_stale(*args, **kwargs):
            if kwargs == {"id": design.id}:
                return StaleQuery()
            return real_filter(*args, **kwargs)

        with patch.object(Design.objects, "filter", side_effect=filter_returning_stale):
            with self.assertRaises(InvalidTransitionError):
                services.accept_design(self.reviewer, design.id)

        self.assertEqual(self._statuses(design), ["pending"])

    def test_owner_edits_only_while_pending(self):
        design = self._submit()
        design = services.update_design(self.owner, design.id, {"name": "Bakery site v2", "pages_count": 4})
        self.assertEqual(design.name, "Bakery site v2")
        self.assertEqual(design.pages_count, 4)

        with self.assertRaises(ValidationError):
            services.update_design(self.owner, design.id, {"pages_count": 1})
        with self.assertRaises(ValidationError):
            services.update_design(self.owner, design.id, {"status": "accepted"})

        services.accept_design(self.reviewer, design.id)
        with self.assertRaises(InvalidTransitionError):
            services.update_design(self.owner, design.id, {"name": "Too late"})
        with self.assertRaises(InvalidTransitionError):
            services.delete_design(self.owner, design.id)

    def test_designs_of_others_are_invisible(self):
        design = self._submit()
        with self.assertRaises(NotFoundError):
            services.get_user_design(self.student, design.id)
        with self.assertRaises(NotFoundError):
            services.delete_design(self.student, design.id)
        self.assertEqual(services.list_user_designs(self.student), [])

    def test_delete_pending_design(self):
        design = self._submit()
        services.delete_design(self.owner, design.id)
        self.assertFalse(Design.objects.filter(id=design.id).exists())
        self.assertEqual(DesignStatusHistory.objects.count(), 0)

    def test_comments(self):
        design = self._submit()
        own = services.add_design_comment(self.owner, design.id, "Any feedback?")
        self.assertFalse(own.is_admin_comment)
        review = services.add_design_comment(self.mentor, design.id, "Add a contact page")
        self.assertTrue(review.is_admin_comment)
        with self.assertRaises(NotFoundError):
            services.add_design_comment(self.student, design.id, "Hello")
        with self.assertRaises(ValidationError):
            services.add_design_comment(self.owner, design.id, "   ")

    def test_review_listing_counts_every_status(self):
        first = self._submit()
        self._submit(name="Second")
        services.reject_design(self.reviewer, first.id)

        designs, counts = services.list_designs_for_review(self.reviewer)
        self.assertEqual(len(designs), 2)
        self.assertEqual(counts["pending"], 1)
        self.assertEqual(counts["rejected"], 1)
        self.assertEqual(counts["completed"], 0)

        rejected, _ = services.list_designs_for_review(self.mentor, status="rejected")
        self.assertEqual([d.id for d in rejected], [first.id])

        with self.assertRaises(ValidationError):
            services.list_designs_for_review(self.reviewer, status="archived")
        with self.assertRaises(InsufficientRoleError):
            services.list_designs_for_review(self.student)


@override_settings(DESIGN_ENFORCE_PAGE_RULES=True)
class DesignViewTests(DjangoTestCase):
    def setUp(self):
        self.owner = make_user("owner@example.com", role="student")
        self.reviewer = make_user("reviewer@example.com", role="admin")

    def _post(self, url, payload):
        return self.client.post(url, data=json.dumps(payload), content_type="application/json")

    def _submit(self):
        self.client.force_login(self.owner)
        response = self._post(reverse("designs:design_list"), {
            "name": "Bakery site",
            "type": "website",
            "pages_count": 3,
            "figma_link": "https://www.figma.com/file/abc",
        })
        self.assertEqual(response.status_code, 201)
        return response.json()["design"]

    def test_submit_requires_login(self):
        response = self._post(reverse("designs:design_list"), {"name": "x", "type": "website", "pages_count": 3})
        self.assertEqual(response.status_code, 401)
        self.assertFalse(response.json()["success"])

    def test_submit_and_list(self):
        design = self._submit()
        self.assertEqual(design["status"], "pending")
        self.assertEqual(len(design["status_history"]), 1)

        response = self.client.get(reverse("designs:design_list"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([d["id"] for d in response.json()["designs"]], [design["id"]])

    def test_invalid_submission_returns_400(self):
        self.client.force_login(self.owner)
        response = self._post(reverse("designs:design_list"), {"name": "x", "type": "website", "pages_count": 2})
        self.assertEqual(response.status_code, 400)

        response = self.client.post(reverse("designs:design_list"), data="{not json", content_type="application/json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Invalid JSON")

    def test_edit_with_unchangeable_fields_returns_400(self):
        design = self._submit()
        url = reverse("designs:design_detail", args=[design["id"]])
        for payload in ({"design_id": 5}, {"user": 1}, {"status": "accepted"}):
            with self.subTest(payload=payload):
                response = self._post(url, payload)
                self.assertEqual(response.status_code, 400)
                self.assertFalse(response.json()["success"])

        response = self._post(url, {"name": "Bakery site v2"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["design"]["name"], "Bakery site v2")

    def test_missing_design_returns_404(self):
        self.client.force_login(self.owner)
        response = self.client.get(reverse("designs:design_detail", args=[9999]))
        self.assertEqual(response.status_code, 404)

    def test_transition_statuses(self):
        design = self._submit()
        url = reverse("designs:design_transition", args=[design["id"]])

        response = self._post(url, {"action": "accept"})
        self.assertEqual(response.status_code, 403)

        self.client.force_login(self.reviewer)
        response = self._post(url, {"action": "accept", "notes": "Approved"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["design"]["status"], "accepted")
        self.assertEqual(response.json()["design"]["admin_notes"], "Approved")

        response = self._post(url, {"action": "accept"})
        self.assertEqual(response.status_code, 409)

    def test_review_list_treats_all_as_no_filter(self):
        self._submit()
        self.client.force_login(self.reviewer)
        response = self.client.get(reverse("designs:review_list"), {"status": "all"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(len(body["designs"]), 1)
        self.assertEqual(body["counts"]["pending"], 1)

    def test_comment_endpoint(self):
        design = self._submit()
        response = self._post(reverse("designs:design_comment_create", args=[design["id"]]), {"comment": "Ready?"})
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["comment"]["comment"], "Ready?")
