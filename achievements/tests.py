from types import SimpleNamespace
from unittest import TestCase

from django.test import TestCase as DjangoTestCase

from accounts.models import CustomUser, Profile
from achievements import config
from achievements.models import Achievement, UserAchievement
from achievements.stats import compute_stats, level_for_points, load_profile_stats
from designs.models import Design
from development.models import TeamMembership


def design(id, status, pages_count, name="Design"):
    return SimpleNamespace(id=id, status=status, pages_count=pages_count, name=name)


def membership(id, design_obj):
    return SimpleNamespace(id=id, design=design_obj)


class ComputeStatsTests(TestCase):
    def test_completed_design_and_membership_score_seventy(self):
        built = design(1, "completed", 4)
        stats = compute_stats([built], [membership(7, design(2, "completed", 3))], [])
        self.assertEqual(stats.design_points, 40)
        self.assertEqual(stats.development_points, 30)
        self.assertEqual(stats.points, 70)
        self.assertEqual(stats.level, 1)
        self.assertEqual(stats.points_to_next_level, 30)

    def test_only_accepted_or_later_designs_score(self):
        designs = [
            design(1, "pending", 5),
            design(2, "rejected", 5),
            design(3, "accepted", 2),
            design(4, "in_development", 1),
        ]
        stats = compute_stats(designs, [], [])
        self.assertEqual(stats.design_count, 4)
        self.assertEqual(stats.design_points, 30)

    def test_unfinished_memberships_do_not_score(self):
        memberships = [membership(1, design(10, "accepted", 2)), membership(2, design(11, "in_development", 2))]
        stats = compute_stats([], memberships, [])
        self.assertEqual(stats.development_points, 0)
        self.assertEqual(stats.development_count, 0)

    def test_level_boundaries(self):
        self.assertEqual(level_for_points(0), 1)
        self.assertEqual(level_for_points(99), 1)
        self.assertEqual(level_for_points(100), 2)
        self.assertEqual(level_for_points(250), 3)

    def test_new_member_badge_always_present(self):
        stats = compute_stats([], [], [])
        self.assertEqual([badge.key for badge in stats.badges], [config.NEW_MEMBER_BADGE["key"]])
        self.assertEqual(stats.badges[0].source, "derived")

    def test_badge_order_catalog_then_derived(self):
        award = SimpleNamespace(
            achievement=SimpleNamespace(id=5, name="Mentor Pick", description="", icon_url="", badge_color="#000")
        )
        stats = compute_stats(
            [design(1, "completed", 1, name="Shop")],
            [membership(3, design(2, "completed", 1))],
            [award],
        )
        self.assertEqual(
            [badge.key for badge in stats.badges],
            ["achievement-5", "design-completed-1", "development-completed-3", "new-member"],
        )
        self.assertEqual(stats.badges[0].source, "catalog")
        self.assertIsNone(stats.badges[0].icon_url)

    def test_compute_is_idempotent(self):
        args = ([design(1, "completed", 4)], [membership(2, design(2, "completed", 2))], [])
        self.assertEqual(compute_stats(*args), compute_stats(*args))


class LoadProfileStatsTests(DjangoTestCase):
    def setUp(self):
        user = CustomUser.objects.create_user(email="maker@example.com", password="pass12345")
        self.profile = Profile.objects.create(user=user, email="maker@example.com")

    def test_stats_from_stored_rows(self):
        built = Design.objects.create(owner=self.profile, name="Studio", type="web_application", pages_count=4, status="completed")
        TeamMembership.objects.create(design=built, user=self.profile)
        Design.objects.create(owner=self.profile, name="Draft", type="landing_page", pages_count=1, status="pending")
        achievement = Achievement.objects.create(name="Early Adopter", description="First cohort")
        UserAchievement.objects.create(profile=self.profile, achievement=achievement)

        stats = load_profile_stats(self.profile)

        self.assertEqual(stats.points, 70)
        self.assertEqual(stats.level, 1)
        self.assertEqual(stats.design_count, 2)
        self.assertEqual(stats.badges[0].name, "Early Adopter")
        self.assertEqual(stats.badges[-1].key, "new-member")
        self.assertEqual(load_profile_stats(self.profile), stats)
