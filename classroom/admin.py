from django.contrib import admin
from .models import ClassSession, Attendance


class AttendanceInline(admin.TabularInline):
    model = Attendance
    extra = 0
    raw_id_fields = ['student']


@admin.register(ClassSession)
class ClassSessionAdmin(admin.ModelAdmin):
    list_display = ['id', 'topic', 'batch', 'status', 'start_time', 'end_time', 'instructor_name', 'live_room_name']
    list_filter = ['status', 'batch', 'start_time']
    search_fields = ['topic', 'batch__name', 'instructor_name', 'live_room_name']
    readonly_fields = ['live_room_name', 'created_at', 'updated_at']
    inlines = [AttendanceInline]
    ordering = ['-start_time']


@admin.register(Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    list_display = ['id', 'session', 'student', 'status', 'joined_at', 'duration']
    list_filter = ['status', 'session__batch']
    search_fields = ['student__user__email', 'session__topic']
    raw_id_fields = ['session', 'student']
