from django import forms
from .models import ContactMessage


class ContactForm(forms.ModelForm):
    """
    Public contact form. Name, email, subject and message are required and
    otherwise stored as given; type is optional and unknown values fall back
    to general.
    """
    email = forms.CharField()
    type = forms.CharField(required=False)

    class Meta:
        model = ContactMessage
        fields = ['name', 'email', 'subject', 'message', 'type']

    def clean_type(self):
        value = self.cleaned_data.get('type')
        if value in dict(ContactMessage.TYPE_CHOICES):
            return value
        return 'general'
