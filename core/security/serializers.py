from rest_framework import serializers

from core.security.fallback import DataSourceMode


class DataSourceModeSerializer(serializers.Serializer):
    """POST body for the data-source endpoint. An empty body toggles."""
    mode = serializers.ChoiceField(choices=DataSourceMode.choices, required=False)
