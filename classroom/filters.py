import django_filters

from api.utils import normalize_choice
from .models import ClassSession


class ClassSessionFilter(django_filters.FilterSet):
    status = django_filters.CharFilter(method='filter_status')
    batch = django_filters.NumberFilter(field_name='batch_id')

    class Meta:
        model = ClassSession
        fields = ['status', 'batch']

    def filter_status(self, queryset, name, value):
        value = normalize_choice(value)
        if not value:
            return queryset
        return queryset.filter(status=value)
