from django.contrib import admin
from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['id', 'student', 'amount', 'method', 'status', 'date', 'batch']
    list_filter = ['status', 'method', 'date']
    search_fields = ['student__user__email', 'student__user__name', 'description']
    raw_id_fields = ['student', 'batch']
    ordering = ['-date']
