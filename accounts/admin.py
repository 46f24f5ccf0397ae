from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.models import Group
from .models import CustomUser, Profile, Skill, UserSkill
from .forms import CustomUserCreationForm, CustomUserChangeForm

# Hide Authentication and Authorization groups
admin.site.unregister(Group)

class UserAdmin(BaseUserAdmin):
    add_form = CustomUserCreationForm
    form = CustomUserChangeForm
    model = CustomUser
    list_display = ("email", "is_email_verified", "is_staff", "is_superuser")
    list_filter = ("is_email_verified", "is_staff", "is_superuser")
    search_fields = ("email",)
    ordering = ("email",)
    actions = ["verify_emails", "unverify_emails"]
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Email Verification", {"fields": ("is_email_verified",)}),
        ("Permissions", {"fields": ("is_staff","is_superuser", "groups", "user_permissions")}),
        ("Important dates", {"fields": ("last_login",)}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("email", "password1", "password2")}),
    )

    def verify_emails(self, request, queryset):
        """Admin action to verify selected users' emails"""
        updated = queryset.update(is_email_verified=True)
        self.message_user(request, f"{updated} user(s) email(s) verified successfully.")
    verify_emails.short_description = "Verify email for selected users"

    def unverify_emails(self, request, queryset):
        """Admin action to unverify selected users' emails"""
        updated = queryset.update(is_email_verified=False)
        self.message_user(request, f"{updated} user(s) email(s) unverified.")
    unverify_emails.short_description = "Unverify email for selected users"

class UserSkillInline(admin.TabularInline):
    model = UserSkill
    extra = 0

class ProfileAdmin(admin.ModelAdmin):
    inlines = [UserSkillInline]
    list_display = ('display_name', 'email', 'role', 'is_active', 'created_at')
    list_filter = ('role', 'is_active')
    search_fields = ('first_name', 'last_name', 'username', 'email')
    readonly_fields = ('user', 'created_at', 'updated_at')
    actions = ['make_mentor', 'make_student']

    fieldsets = (
        ('User Information', {
            'fields': ('user', 'email', 'role', 'is_active')
        }),
        ('Personal Information', {
            'fields': ('first_name', 'last_name', 'username', 'avatar_url', 'bio', 'phone', 'location', 'years_of_experience')
        }),
        ('Social Media & Links', {
            'fields': ('linkedin_url', 'github_url', 'portfolio_url')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def has_delete_permission(self, request, obj=None):
        # Profiles are never deleted by the application
        return False

    def make_mentor(self, request, queryset):
        updated = queryset.update(role='mentor')
        self.message_user(request, f"{updated} profile(s) set to mentor.")
    make_mentor.short_description = "Set role to mentor"

    def make_student(self, request, queryset):
        updated = queryset.update(role='student')
        self.message_user(request, f"{updated} profile(s) set to student.")
    make_student.short_description = "Set role to student"

class SkillAdmin(admin.ModelAdmin):
    list_display = ('name', 'category')
    list_filter = ('category',)
    search_fields = ('name',)

admin.site.register(CustomUser, UserAdmin)
admin.site.register(Profile, ProfileAdmin)
admin.site.register(Skill, SkillAdmin)
