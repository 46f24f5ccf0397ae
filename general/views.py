import logging

from django.http import JsonResponse
from django.views.decorators.http import require_POST

from common.errors import LifecycleError
from common.responses import parse_json_body
from .email_service import EmailService
from .forms import ContactForm

logger = logging.getLogger(__name__)


@require_POST
def contact(request):
    """
    POST /api/contact/
    Body: {name, email, subject, message, type?}. Stores the message, then
    relays it to the contact inbox. 400 only when a field is missing, 500 when
    the relay fails, 200 with the relay result otherwise.
    """
    try:
        data = parse_json_body(request)
    except LifecycleError as e:
        return JsonResponse({'error': e.message}, status=400)

    form = ContactForm({key: (value.strip() if isinstance(value, str) else value) for key, value in data.items()})
    if not form.is_valid():
        return JsonResponse({'error': 'All fields are required'}, status=400)

    contact_message = form.save()
    try:
        sent = EmailService.send_contact_message(contact_message)
    except Exception as e:
        logger.warning("contact: relay failed for message=%s: %s", contact_message.id, e)
        sent = False
    if not sent:
        return JsonResponse({'error': 'Failed to send email'}, status=500)

    contact_message.relayed = True
    contact_message.save(update_fields=['relayed'])
    return JsonResponse({
        'message': 'Email sent successfully',
        'data': {'id': contact_message.id, 'type': contact_message.type},
    }, status=200)
