import django_filters

from api.utils import normalize_choice
from .models import Payment


class PaymentFilter(django_filters.FilterSet):
    status = django_filters.CharFilter(method='filter_status')
    student = django_filters.NumberFilter(field_name='student_id')

    class Meta:
        model = Payment
        fields = ['status', 'student']

    def filter_status(self, queryset, name, value):
        value = normalize_choice(value)
        if not value:
            return queryset
        return queryset.filter(status=value)
