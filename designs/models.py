"""
Design lifecycle models. Status changes go through designs.services only;
DesignStatusHistory rows are append-only.
"""
from django.db import models
from django.utils import timezone

from designs import config


class Design(models.Model):
    """A submitted project, reviewed by admins/mentors and built by a team."""
    TYPE_CHOICES = list(config.TYPE_LABELS.items())
    STATUS_CHOICES = list(config.STATUS_LABELS.items())

    owner = models.ForeignKey("accounts.Profile", on_delete=models.CASCADE, related_name="designs")
    name = models.CharField(max_length=200)
    type = models.CharField(max_length=30, choices=TYPE_CHOICES, default='website')
    pages_count = models.PositiveIntegerField(default=1)
    figma_link = models.URLField(max_length=500, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending', db_index=True)
    admin_notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)
    accepted_at = models.DateTimeField(blank=True, null=True)
    development_started_at = models.DateTimeField(blank=True, null=True)
    completed_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        db_table = "designs"
        verbose_name = "Design"
        verbose_name_plural = "Designs"
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.name} ({self.status})"

    @property
    def is_editable(self):
        return self.status == 'pending'

    @property
    def is_terminal(self):
        return self.status in config.TERMINAL_STATUSES


class DesignStatusHistory(models.Model):
    """Audit entry appended on submission and on every status change. Never updated."""
    design = models.ForeignKey("designs.Design", on_delete=models.CASCADE, related_name="status_history")
    status = models.CharField(max_length=20, choices=Design.STATUS_CHOICES)
    changed_by = models.ForeignKey(
        "accounts.Profile",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="design_status_changes",
    )
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "design_status_history"
        verbose_name = "Design Status History"
        verbose_name_plural = "Design Status History"
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"Design {self.design_id} -> {self.status} at {self.created_at:%Y-%m-%d %H:%M}"


class DesignComment(models.Model):
    design = models.ForeignKey("designs.Design", on_delete=models.CASCADE, related_name="comments")
    author = models.ForeignKey("accounts.Profile", on_delete=models.CASCADE, related_name="design_comments")
    comment = models.TextField()
    is_admin_comment = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "design_comments"
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"Comment by {self.author_id} on design {self.design_id}"
