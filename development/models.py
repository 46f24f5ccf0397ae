from django.db import models
from django.utils import timezone


class TeamMembership(models.Model):
    """
    A user's claimed slot on a design's development team. One slot per page:
    a design's team never grows past its pages_count (enforced by
    development.services.join_team, not by the database).
    """
    ROLE_CHOICES = [
        ('developer', 'Developer'),
        ('lead', 'Lead'),
        ('designer', 'Designer'),
        ('tester', 'Tester'),
    ]

    design = models.ForeignKey("designs.Design", on_delete=models.CASCADE, related_name="team_members")
    user = models.ForeignKey("accounts.Profile", on_delete=models.CASCADE, related_name="team_memberships")
    joined_at = models.DateTimeField(default=timezone.now)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default='developer')

    class Meta:
        db_table = "development_team_members"
        verbose_name = "Team Membership"
        verbose_name_plural = "Team Memberships"
        ordering = ['joined_at', 'id']
        constraints = [
            models.UniqueConstraint(fields=['design', 'user'], name='unique_design_team_member'),
        ]

    def __str__(self):
        return f"{self.user_id} on design {self.design_id} ({self.role})"
