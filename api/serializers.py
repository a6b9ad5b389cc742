from rest_framework import serializers


class LowercaseChoiceField(serializers.ChoiceField):
    """Choice field that accepts values in any case and stores them lowercase."""

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = data.strip().lower()
        return super().to_internal_value(data)
