from django.contrib import admin
from .models import TeamMembership


class TeamMembershipAdmin(admin.ModelAdmin):
    list_display = ('design', 'user', 'role', 'joined_at')
    list_filter = ('role', 'design__status')
    search_fields = ('design__name', 'user__email', 'user__first_name', 'user__last_name')
    raw_id_fields = ('design', 'user')


admin.site.register(TeamMembership, TeamMembershipAdmin)
