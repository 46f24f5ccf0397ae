from django.contrib import admin
from .models import Achievement, UserAchievement


class AchievementAdmin(admin.ModelAdmin):
    list_display = ('name', 'badge_color', 'created_at')
    search_fields = ('name', 'description')


class UserAchievementAdmin(admin.ModelAdmin):
    list_display = ('achievement', 'profile', 'awarded_at')
    list_filter = ('achievement',)
    search_fields = ('profile__email', 'achievement__name')
    raw_id_fields = ('profile',)


admin.site.register(Achievement, AchievementAdmin)
admin.site.register(UserAchievement, UserAchievementAdmin)
