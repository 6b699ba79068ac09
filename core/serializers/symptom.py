from rest_framework import serializers

from core.serializers.auth import clean_text


class ReportedSymptomSerializer(serializers.Serializer):
    symptom = serializers.IntegerField(min_value=1)
    severity = serializers.IntegerField(min_value=1, max_value=10)
    duration = serializers.CharField(max_length=64, required=False, allow_blank=True)

    def validate_duration(self, v):
        return clean_text(v)


class SymptomCheckSerializer(serializers.Serializer):
    symptoms = ReportedSymptomSerializer(many=True, allow_empty=False)


