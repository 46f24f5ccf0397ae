from django.db import models
from django.utils import timezone


class Achievement(models.Model):
    """Catalog badge that admins award to profiles"""
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    icon_url = models.URLField(blank=True)
    badge_color = models.CharField(max_length=20, blank=True, help_text="CSS color used for the badge border")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "achievements"
        ordering = ['name']

    def __str__(self):
        return self.name


class UserAchievement(models.Model):
    profile = models.ForeignKey("accounts.Profile", on_delete=models.CASCADE, related_name="achievements")
    achievement = models.ForeignKey("achievements.Achievement", on_delete=models.CASCADE, related_name="awards")
    awarded_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "user_achievements"
        ordering = ['awarded_at', 'id']
        unique_together = ['profile', 'achievement']

    def __str__(self):
        return f"{self.achievement} -> {self.profile_id}"
