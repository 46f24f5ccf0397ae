from django.contrib import admin, messages

from common.errors import LifecycleError
from .models import Design, DesignStatusHistory, DesignComment
from . import services


class DesignStatusHistoryInline(admin.TabularInline):
    model = DesignStatusHistory
    extra = 0
    can_delete = False
    readonly_fields = ('status', 'changed_by', 'notes', 'created_at')

    def has_add_permission(self, request, obj=None):
        return False


class DesignCommentInline(admin.TabularInline):
    model = DesignComment
    extra = 0
    readonly_fields = ('author', 'is_admin_comment', 'created_at')


class DesignAdmin(admin.ModelAdmin):
    list_display = ('name', 'type', 'pages_count', 'status', 'owner', 'created_at')
    list_filter = ('status', 'type')
    search_fields = ('name', 'owner__email', 'owner__first_name', 'owner__last_name')
    # Status moves only through the transition actions below
    readonly_fields = ('status', 'created_at', 'updated_at', 'accepted_at', 'development_started_at', 'completed_at')
    inlines = [DesignStatusHistoryInline, DesignCommentInline]
    actions = ["accept_designs", "reject_designs", "start_development", "complete_development"]

    def _run_transition(self, request, queryset, action):
        done = 0
        for design in queryset:
            try:
                services.transition_design(request.user, design.id, action)
                done += 1
            except LifecycleError as e:
                self.message_user(request, f"{design.name}: {e.message}", level=messages.ERROR)
        if done:
            self.message_user(request, f"{done} design(s) updated.")

    def accept_designs(self, request, queryset):
        self._run_transition(request, queryset, "accept")
    accept_designs.short_description = "Accept selected pending designs"

    def reject_designs(self, request, queryset):
        self._run_transition(request, queryset, "reject")
    reject_designs.short_description = "Reject selected pending designs"

    def start_development(self, request, queryset):
        self._run_transition(request, queryset, "start_development")
    start_development.short_description = "Start development on selected accepted designs"

    def complete_development(self, request, queryset):
        self._run_transition(request, queryset, "complete")
    complete_development.short_description = "Complete development on selected designs"


admin.site.register(Design, DesignAdmin)
