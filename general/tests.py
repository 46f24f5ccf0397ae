import json
from unittest.mock import patch

from django.core import mail
from django.test import TestCase, override_settings
from django.urls import reverse

from general.models import ContactMessage


@override_settings(
    EMAIL_BACKEND="django.core.mail.backends.locmem.EmailBackend",
    CONTACT_RECIPIENTS=["team@openstage.test"],
)
class ContactViewTests(TestCase):
    def _post(self, payload):
        return self.client.post(reverse("general:contact"), data=json.dumps(payload), content_type="application/json")

    def _payload(self, **overrides):
        payload = {
            "name": "Lin",
            "email": "lin@example.com",
            "subject": "Hello",
            "message": "I would like to mentor.",
            "type": "mentorship",
        }
        payload.update(overrides)
        return payload

    def test_missing_field_is_400(self):
        response = self._post(self._payload(subject="  "))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "All fields are required")
        self.assertEqual(ContactMessage.objects.count(), 0)

    def test_any_non_empty_values_are_relayed(self):
        response = self._post(self._payload(email="not-an-email", subject="s" * 400, type="unknown"))
        self.assertEqual(response.status_code, 200)

        stored = ContactMessage.objects.get()
        self.assertEqual(stored.email, "not-an-email")
        self.assertEqual(len(stored.subject), 400)
        self.assertEqual(stored.type, "general")
        self.assertTrue(stored.relayed)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].reply_to, [])

    def test_each_missing_field_is_400(self):
        for field in ("name", "email", "subject", "message"):
            with self.subTest(field=field):
                payload = self._payload()
                del payload[field]
                response = self._post(payload)
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()["error"], "All fields are required")
        self.assertEqual(ContactMessage.objects.count(), 0)

    def test_message_is_stored_and_relayed(self):
        response = self._post(self._payload())
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Email sent successfully")

        stored = ContactMessage.objects.get()
        self.assertTrue(stored.relayed)
        self.assertEqual(stored.type, "mentorship")
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["team@openstage.test"])
        self.assertEqual(mail.outbox[0].reply_to, ["lin@example.com"])

    def test_type_defaults_to_general(self):
        payload = self._payload()
        del payload["type"]
        response = self._post(payload)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(ContactMessage.objects.get().type, "general")

    @patch("general.views.EmailService.send_contact_message", side_effect=ConnectionRefusedError("smtp down"))
    def test_relay_failure_is_500(self, send_contact_message):
        response = self._post(self._payload())
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "Failed to send email")
        self.assertFalse(ContactMessage.objects.get().relayed)
