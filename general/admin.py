from django.contrib import admin
from .models import ContactMessage


class ContactMessageAdmin(admin.ModelAdmin):
    list_display = ('subject', 'name', 'email', 'type', 'status', 'relayed', 'created_at')
    list_filter = ('type', 'status', 'relayed')
    search_fields = ('name', 'email', 'subject', 'message')
    readonly_fields = ('name', 'email', 'subject', 'message', 'type', 'relayed', 'created_at')
    actions = ['mark_resolved']

    def has_add_permission(self, request):
        return False

    def mark_resolved(self, request, queryset):
        updated = queryset.update(status='resolved')
        self.message_user(request, f"{updated} message(s) marked as resolved.")
    mark_resolved.short_description = "Mark selected messages as resolved"


admin.site.register(ContactMessage, ContactMessageAdmin)
