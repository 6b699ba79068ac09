from rest_framework import serializers

from core.models import Consultation
from core.serializers.auth import clean_text


class ConsultBookSerializer(serializers.Serializer):
    professional = serializers.IntegerField(min_value=1)
    date = serializers.DateTimeField()
    duration = serializers.IntegerField(min_value=1)
    topic = serializers.CharField(max_length=255)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    concerns = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_topic(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Topic is required')
        return v

    def validate_notes(self, v):
        return clean_text(v)

    def validate_concerns(self, v):
        return clean_text(v)


class ConsultUpdateSerializer(serializers.Serializer):
    date = serializers.DateTimeField(required=False)
    duration = serializers.IntegerField(min_value=1, required=False)
    topic = serializers.CharField(max_length=255, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    concerns = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=[c for c, _ in Consultation.STATUS_CHOICES], required=False)

    def validate_topic(self, v):
        return clean_text(v)

    def validate_notes(self, v):
        return clean_text(v)

    def validate_concerns(self, v):
        return clean_text(v)
