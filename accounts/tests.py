import json
from types import SimpleNamespace
from unittest import TestCase
from unittest.mock import patch

from django.contrib.auth.models import AnonymousUser
from django.db import DatabaseError
from django.test import TestCase as DjangoTestCase
from django.urls import reverse

from accounts import services
from accounts.models import CustomUser, Profile
from common.errors import AuthError, InfrastructureError, InsufficientRoleError


class IdentityTests(TestCase):
    def test_anonymous_user_is_rejected(self):
        with self.assertRaises(AuthError):
            services.require_identity(AnonymousUser())
        with self.assertRaises(AuthError):
            services.require_identity(None)

    @patch("accounts.services.Profile.objects.get_or_create", side_effect=DatabaseError("connection refused"))
    def test_profile_storage_failure_is_infrastructure_error(self, get_or_create):
        user = SimpleNamespace(is_authenticated=True, pk=1, email="a@example.com")
        with self.assertRaises(InfrastructureError) as ctx:
            services.ensure_profile(user)
        self.assertEqual(ctx.exception.status_code, 503)
        self.assertEqual(ctx.exception.message, InfrastructureError.GENERIC_MESSAGE)


class ProfileServiceTests(DjangoTestCase):
    def setUp(self):
        self.user = CustomUser.objects.create_user(email="Ada@Example.com", password="pass12345")

    def test_ensure_profile_creates_student_once(self):
        profile = services.ensure_profile(self.user, first_name="Ada")
        self.assertEqual(profile.pk, self.user.pk)
        self.assertEqual(profile.role, "student")
        self.assertEqual(profile.email, "ada@example.com")
        self.assertEqual(profile.username, "ada")

        again = services.ensure_profile(self.user, first_name="Changed")
        self.assertEqual(again.first_name, "Ada")
        self.assertEqual(Profile.objects.filter(user=self.user).count(), 1)

    def test_require_role(self):
        with self.assertRaises(InsufficientRoleError):
            services.require_role(self.user)
        profile = services.ensure_profile(self.user)
        with self.assertRaises(InsufficientRoleError):
            services.require_role(self.user)
        profile.role = "mentor"
        profile.save()
        self.assertEqual(services.require_role(self.user).pk, profile.pk)

    def test_update_profile_ignores_role(self):
        services.ensure_profile(self.user)
        profile = services.update_profile(self.user, bio="Designer", role="admin")
        self.assertEqual(profile.bio, "Designer")
        self.assertEqual(Profile.objects.get(pk=profile.pk).role, "student")


class AccountViewTests(DjangoTestCase):
    def _post(self, url, payload):
        return self.client.post(url, data=json.dumps(payload), content_type="application/json")

    def test_register_creates_user_and_profile(self):
        response = self._post(reverse("accounts:register"), {
            "first_name": "Grace",
            "last_name": "Hopper",
            "email": "grace@example.com",
            "password1": "s3cret-pass",
            "password2": "s3cret-pass",
        })
        self.assertEqual(response.status_code, 201)
        profile = Profile.objects.get(email="grace@example.com")
        self.assertEqual(profile.role, "student")
        self.assertEqual(profile.first_name, "Grace")

    def test_register_rejects_mismatched_passwords(self):
        response = self._post(reverse("accounts:register"), {
            "first_name": "Grace",
            "last_name": "Hopper",
            "email": "grace@example.com",
            "password1": "one",
            "password2": "two",
        })
        self.assertEqual(response.status_code, 400)
        self.assertFalse(CustomUser.objects.filter(email="grace@example.com").exists())

    def test_login(self):
        CustomUser.objects.create_user(email="grace@example.com", password="s3cret-pass")
        bad = self._post(reverse("accounts:login"), {"email": "grace@example.com", "password": "wrong"})
        self.assertEqual(bad.status_code, 400)
        good = self._post(reverse("accounts:login"), {"email": "GRACE@example.com", "password": "s3cret-pass"})
        self.assertEqual(good.status_code, 200)

    def test_auth_callback_redirects(self):
        response = self.client.get(reverse("accounts:auth_callback"), {"error": "access_denied"})
        self.assertRedirects(response, "/accounts/login/?error=auth_callback_failed", fetch_redirect_response=False)

        response = self.client.get(reverse("accounts:auth_callback"))
        self.assertRedirects(response, "/accounts/login/", fetch_redirect_response=False)

        user = CustomUser.objects.create_user(email="grace@example.com", password="s3cret-pass")
        self.client.force_login(user)
        response = self.client.get(reverse("accounts:auth_callback"))
        self.assertRedirects(response, "/", fetch_redirect_response=False)

    def test_profile_requires_login(self):
        self.assertEqual(self.client.get(reverse("accounts:profile")).status_code, 401)

    def test_profile_returns_stats_and_accepts_edits(self):
        user = CustomUser.objects.create_user(email="grace@example.com", password="s3cret-pass")
        self.client.force_login(user)

        body = self.client.get(reverse("accounts:profile")).json()
        self.assertEqual(body["profile"]["role"], "student")
        self.assertEqual(body["stats"]["points"], 0)
        self.assertEqual(body["stats"]["level"], 1)
        self.assertEqual([badge["id"] for badge in body["stats"]["badges"]], ["new-member"])

        response = self._post(reverse("accounts:profile"), {"bio": "Compiler person", "role": "admin"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["profile"]["bio"], "Compiler person")
        self.assertEqual(response.json()["profile"]["role"], "student")
