from django.contrib import admin
from .models import Student, Notification


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'phone', 'payment_status', 'total_paid', 'total_due', 'attendance_rate', 'enrolled_at']
    list_filter = ['payment_status', 'enrolled_at']
    search_fields = ['user__email', 'user__name', 'phone']
    readonly_fields = ['enrolled_at', 'attendance_rate']
    raw_id_fields = ['user']
    ordering = ['-enrolled_at']

    fieldsets = (
        ('Student Info', {
            'fields': ('user', 'phone', 'enrolled_at')
        }),
        ('Fees', {
            'fields': ('payment_status', 'total_paid', 'total_due', 'credit_balance')
        }),
        ('Attendance', {
            'fields': ('attendance_rate',)
        }),
    )


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'type', 'title', 'read', 'created_at']
    list_filter = ['type', 'read', 'created_at']
    search_fields = ['user__email', 'title', 'message']
    raw_id_fields = ['user']
    ordering = ['-created_at']
