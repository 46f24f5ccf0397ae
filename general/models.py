from django.db import models
from django.utils import timezone


class ContactMessage(models.Model):
    """Every contact-form submission, stored before it is relayed by email"""
    TYPE_CHOICES = [
        ('general', 'General'),
        ('partnership', 'Partnership'),
        ('support', 'Support'),
        ('mentorship', 'Mentorship'),
    ]

    STATUS_CHOICES = [
        ('new', 'New'),
        ('in_progress', 'In Progress'),
        ('resolved', 'Resolved'),
        ('closed', 'Closed'),
    ]

    # Stored as given; the contact endpoint only refuses missing fields
    name = models.TextField()
    email = models.TextField()
    subject = models.TextField()
    message = models.TextField()
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='general')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='new')
    relayed = models.BooleanField(default=False, help_text="True once the notification email was accepted by the mail server")
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "contact_messages"
        verbose_name = "Contact Message"
        verbose_name_plural = "Contact Messages"
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.subject} - {self.email}"
