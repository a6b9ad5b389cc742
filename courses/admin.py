from django.contrib import admin
from .models import Batch, BatchEnrollment


class BatchEnrollmentInline(admin.TabularInline):
    model = BatchEnrollment
    extra = 0
    raw_id_fields = ['student']
    readonly_fields = ['enrolled_at']


@admin.register(Batch)
class BatchAdmin(admin.ModelAdmin):
    list_display = ['name', 'level', 'instructor_name', 'capacity', 'enrolled_count', 'start_date', 'end_date', 'price']
    list_filter = ['level', 'start_date']
    search_fields = ['name', 'instructor_name', 'description']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [BatchEnrollmentInline]
    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'level', 'description', 'cover_image')
        }),
        ('Schedule', {
            'fields': ('schedule_days', 'schedule_time', 'start_date', 'end_date', 'instructor_name')
        }),
        ('Enrollment', {
            'fields': ('capacity', 'price')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at')
        }),
    )


@admin.register(BatchEnrollment)
class BatchEnrollmentAdmin(admin.ModelAdmin):
    list_display = ['student', 'batch', 'enrolled_at']
    list_filter = ['batch']
    search_fields = ['student__user__email', 'student__user__name', 'batch__name']
    raw_id_fields = ['student', 'batch']
