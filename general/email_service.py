"""
Universal email service for sending transactional emails.
Provides a centralized way to send HTML emails with consistent branding.
"""
from django.core.exceptions import ValidationError
from django.core.mail import EmailMultiAlternatives
from django.core.validators import validate_email
from django.template.loader import render_to_string
from django.conf import settings
from typing import List, Optional, Dict, Any
import os


class EmailService:
    """Service for sending transactional emails with consistent templates."""

    @staticmethod
    def get_site_domain() -> str:
        """
        Get the site domain based on DEVELOPMENT_MODE setting.

        Returns:
            str: The full site domain URL (e.g., 'https://openstage.org' or 'http://localhost:8000')
        """
        development_mode = getattr(settings, 'DEVELOPMENT_MODE', 'dev').lower()
        if development_mode == 'prod':
            site_domain = os.getenv('SITE_DOMAIN', 'https://openstage.org')
            # Ensure it has protocol
            if not site_domain.startswith(('http://', 'https://')):
                site_domain = f'https://{site_domain}'
            return site_domain
        else:
            return 'http://localhost:8000'

    @staticmethod
    def send_email(
        subject: str,
        recipients: List[str],
        template_name: str,
        context: Optional[Dict[str, Any]] = None,
        from_email: Optional[str] = None,
        reply_to: Optional[List[str]] = None,
        fail_silently: bool = False,
    ) -> bool:
        """
        Send an HTML email using a template.

        Args:
            subject: Email subject line
            recipients: Recipient email addresses
            template_name: Name of the email template (without .html extension)
            context: Dictionary of context variables for the template
            from_email: Sender email (defaults to DEFAULT_FROM_EMAIL)
            reply_to: Optional Reply-To addresses
            fail_silently: Whether to fail silently on errors

        Returns:
            bool: True if the mail server accepted the message
        """
        if context is None:
            context = {}

        if from_email is None:
            from_email = settings.DEFAULT_FROM_EMAIL

        context.setdefault('site_domain', EmailService.get_site_domain())
        context.setdefault('site_name', 'OpenStage')

        html_content = render_to_string(f'emails/{template_name}.html', context)

        msg = EmailMultiAlternatives(
            subject=subject,
            body='',  # Plain text version (empty, we only send HTML)
            from_email=from_email,
            to=recipients,
            reply_to=reply_to,
        )
        msg.attach_alternative(html_content, "text/html")

        sent = msg.send(fail_silently=fail_silently)
        return sent > 0

    @staticmethod
    def send_contact_message(contact_message) -> bool:
        """
        Relay a stored contact-form submission to the site's contact inbox.

        Args:
            contact_message: ContactMessage instance

        Returns:
            bool: True if email was sent successfully

        Raises:
            Whatever the mail backend raises when the relay fails.
        """
        context = {
            'name': contact_message.name,
            'email': contact_message.email,
            'subject': contact_message.subject,
            'message': contact_message.message,
            'type': contact_message.get_type_display(),
        }
        try:
            validate_email(contact_message.email)
            reply_to = [contact_message.email]
        except ValidationError:
            # Submitted addresses are stored as given; only usable ones become Reply-To
            reply_to = None
        return EmailService.send_email(
            subject=' '.join(contact_message.subject.splitlines()),
            recipients=list(settings.CONTACT_RECIPIENTS),
            template_name='contact_message',
            context=context,
            reply_to=reply_to,
        )
