import django_filters
from django.db.models import Q

from api.utils import normalize_choice
from .models import Student


class StudentFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method='filter_search')
    payment_status = django_filters.CharFilter(method='filter_payment_status')

    class Meta:
        model = Student
        fields = ['search', 'payment_status']

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(user__name__icontains=value) |
            Q(user__email__icontains=value) |
            Q(phone__icontains=value)
        )

    def filter_payment_status(self, queryset, name, value):
        value = normalize_choice(value)
        if not value:
            return queryset
        return queryset.filter(payment_status=value)
