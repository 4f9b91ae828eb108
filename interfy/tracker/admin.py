from django.contrib import admin

from .models import Interview


@admin.register(Interview)
class InterviewAdmin(admin.ModelAdmin):
    list_display = ("company_name", "job_position", "user", "interview_date", "priority_level", "status")
    list_filter = ("status", "priority_level")
    readonly_fields = ("created_at", "updated_at")
    search_fields = ("company_name", "job_position", "interviewer_name")
