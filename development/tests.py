from unittest.mock import patch

from django.contrib.auth.models import AnonymousUser
from django.db import DatabaseError
from django.test import TestCase, override_settings
from django.urls import reverse

from accounts.models import CustomUser, Profile
from common.errors import (
    AuthError,
    CapacityError,
    ConflictError,
    InfrastructureError,
    NotFoundError,
    PolicyError,
)
from designs import services as design_services
from development import services
from development.models import TeamMembership


def make_user(email, role="student"):
    user = CustomUser.objects.create_user(email=email, password="pass12345")
    Profile.objects.create(user=user, email=email, first_name=email.split("@")[0], role=role)
    return user


@override_settings(DESIGN_ENFORCE_PAGE_RULES=True)
class JoinTeamTests(TestCase):
    def setUp(self):
        self.reviewer = make_user("reviewer@example.com", role="admin")
        self.owner = make_user("owner@example.com")
        self.alice = make_user("alice@example.com")
        self.bob = make_user("bob@example.com")

    def _design(self, status="accepted", type="landing_page", pages_count=1, name="Landing"):
        design = design_services.submit_design(self.owner, name=name, type=type, pages_count=pages_count)
        if status in ("accepted", "in_development", "completed"):
            design_services.accept_design(self.reviewer, design.id)
        if status in ("in_development", "completed"):
            design_services.start_development(self.reviewer, design.id)
        if status == "completed":
            design_services.complete_development(self.reviewer, design.id)
        if status == "rejected":
            design_services.reject_design(self.reviewer, design.id)
        return design

    def test_join_accepted_design(self):
        design = self._design()
        membership = services.join_team(self.alice, design.id)
        self.assertEqual(membership.user_id, self.alice.pk)
        self.assertEqual(membership.role, "developer")
        team = services.get_team(design.id)
        self.assertEqual([member.user_id for member in team], [self.alice.pk])
        self.assertEqual(team[0].email, "alice@example.com")

    def test_landing_page_team_fills_after_one_join(self):
        design = self._design(status="in_development")
        services.join_team(self.alice, design.id)
        with self.assertRaises(CapacityError):
            services.join_team(self.bob, design.id)
        self.assertEqual(TeamMembership.objects.filter(design_id=design.id).count(), 1)

    def test_team_never_exceeds_pages_count(self):
        design = self._design(type="web_application", pages_count=2)
        extra = make_user("carol@example.com")
        services.join_team(self.alice, design.id)
        services.join_team(self.bob, design.id)
        with self.assertRaises(CapacityError):
            services.join_team(extra, design.id)
        self.assertEqual(len(services.get_team(design.id)), 2)

    def test_joining_twice_is_a_conflict(self):
        design = self._design(type="web_application", pages_count=3)
        services.join_team(self.alice, design.id)
        with self.assertRaises(ConflictError):
            services.join_team(self.alice, design.id)

    def test_capacity_is_checked_before_duplicate_membership(self):
        design = self._design()
        services.join_team(self.alice, design.id)
        with self.assertRaises(CapacityError):
            services.join_team(self.alice, design.id)

    def test_one_ongoing_project_at_a_time(self):
        active = self._design(status="in_development", name="Active")
        other = self._design(type="web_application", pages_count=2, name="Other")
        services.join_team(self.alice, active.id)
        with self.assertRaises(PolicyError):
            services.join_team(self.alice, other.id)
        self.assertFalse(TeamMembership.objects.filter(design_id=other.id).exists())

    def test_accepted_membership_does_not_block_other_joins(self):
        first = self._design(type="web_application", pages_count=2, name="First")
        second = self._design(type="web_application", pages_count=2, name="Second")
        services.join_team(self.alice, first.id)
        services.join_team(self.alice, second.id)
        self.assertEqual(services.list_user_team_design_ids(self.alice), sorted([first.id, second.id]))

    def test_only_accepted_or_in_development_designs_are_joinable(self):
        for status in ("pending", "rejected", "completed"):
            with self.subTest(status=status):
                design = self._design(status=status, name=status)
                with self.assertRaises(NotFoundError):
                    services.join_team(self.alice, design.id)
        with self.assertRaises(NotFoundError):
            services.join_team(self.alice, 9999)

    def test_join_requires_identity(self):
        design = self._design()
        with self.assertRaises(AuthError):
            services.join_team(AnonymousUser(), design.id)

    def test_join_provisions_missing_profile(self):
        design = self._design()
        newcomer = CustomUser.objects.create_user(email="new@example.com", password="pass12345")
        services.join_team(newcomer, design.id)
        self.assertEqual(Profile.objects.get(user=newcomer).role, "student")

    def test_storage_failure_on_insert_is_infrastructure_error(self):
        design = self._design()
        with patch("development.services.TeamMembership.objects.create", side_effect=DatabaseError("no such table")):
            with self.assertRaises(InfrastructureError) as ctx:
                services.join_team(self.alice, design.id)
        self.assertEqual(ctx.exception.status_code, 503)
        self.assertIn("not yet available", ctx.exception.message)

    def test_team_reads_degrade_to_empty(self):
        design = self._design()
        services.join_team(self.alice, design.id)
        with patch("development.services.TeamMembership.objects.filter", side_effect=DatabaseError("relation missing")):
            self.assertEqual(services.get_teams([design.id]), {design.id: []})
            self.assertEqual(services.list_user_team_design_ids(self.alice), [])
        self.assertEqual(len(services.get_team(design.id)), 1)

    def test_development_listing_and_stats(self):
        accepted = self._design(type="web_application", pages_count=2, name="Accepted")
        in_dev = self._design(status="in_development", name="Building")
        self._design(status="completed", name="Done")
        self._design(status="pending", name="Waiting")
        services.join_team(self.alice, accepted.id)

        entries = services.list_development_designs()
        self.assertEqual(len(entries), 3)
        by_id = {entry.design.id: entry for entry in entries}
        self.assertEqual(by_id[accepted.id].joined_count, 1)
        self.assertEqual(by_id[accepted.id].open_slots, 1)
        self.assertFalse(by_id[accepted.id].is_full)
        self.assertTrue(by_id[accepted.id].has_member(self.alice.pk))
        self.assertEqual(by_id[in_dev.id].open_slots, 1)

        only_building = services.list_development_designs(status="in_development")
        self.assertEqual([entry.design.id for entry in only_building], [in_dev.id])

        stats = services.development_stats()
        self.assertEqual(stats, {"accepted": 1, "in_development": 1, "completed": 1, "total": 3})

    def test_active_project_id(self):
        design = self._design(status="in_development")
        self.assertIsNone(services.active_project_id(self.alice))
        services.join_team(self.alice, design.id)
        self.assertEqual(services.active_project_id(self.alice), design.id)


@override_settings(DESIGN_ENFORCE_PAGE_RULES=True)
class DevelopmentViewTests(TestCase):
    def setUp(self):
        self.reviewer = make_user("reviewer@example.com", role="admin")
        self.alice = make_user("alice@example.com")
        self.bob = make_user("bob@example.com")
        self.design = design_services.submit_design(self.alice, name="Landing", type="landing_page", pages_count=1)
        design_services.accept_design(self.reviewer, self.design.id)

    def test_board_is_public(self):
        response = self.client.get(reverse("development:board"))
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["stats"]["accepted"], 1)
        self.assertEqual(body["my_design_ids"], [])
        self.assertNotIn("can_join", body["designs"][0])

    def test_join_flow(self):
        url = reverse("development:join", args=[self.design.id])
        self.assertEqual(self.client.post(url).status_code, 401)

        self.client.force_login(self.alice)
        response = self.client.post(url)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["membership"]["design_id"], self.design.id)

        board = self.client.get(reverse("development:board")).json()
        self.assertEqual(board["my_design_ids"], [self.design.id])
        entry = board["designs"][0]
        self.assertTrue(entry["joined_by_me"])
        self.assertTrue(entry["is_full"])
        self.assertFalse(entry["can_join"])

        self.client.force_login(self.bob)
        response = self.client.post(url)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"], "This project team is already full.")

    def test_join_missing_design_is_404(self):
        self.client.force_login(self.bob)
        response = self.client.post(reverse("development:join", args=[9999]))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "Project not found.")
