from rest_framework import serializers

from core.serializers.auth import clean_text


class _TagsField(serializers.ListField):
    child = serializers.CharField(max_length=64)

    def to_internal_value(self, data):
        return [t for t in (clean_text(x) for x in super().to_internal_value(data)) if t]


class WebinarCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    date = serializers.DateTimeField()
    duration = serializers.IntegerField(min_value=1)
    capacity = serializers.IntegerField(min_value=1)
    tags = _TagsField(required=False, default=list)

    def validate_title(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Title is required')
        return v

    def validate_description(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Description is required')
        return v


class WebinarUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False)
    date = serializers.DateTimeField(required=False)
    duration = serializers.IntegerField(min_value=1, required=False)
    capacity = serializers.IntegerField(min_value=1, required=False)
    tags = _TagsField(required=False)
    recordingUrl = serializers.URLField(max_length=512, required=False, allow_blank=True)
    isRecorded = serializers.BooleanField(required=False)

    def validate_title(self, v):
        return clean_text(v)

    def validate_description(self, v):
        return clean_text(v)

    def to_service_kwargs(self) -> dict:
        vd = dict(self.validated_data)
        if 'recordingUrl' in vd:
            vd['recording_url'] = vd.pop('recordingUrl')
        if 'isRecorded' in vd:
            vd['is_recorded'] = vd.pop('isRecorded')
        return vd


class AttendanceSerializer(serializers.Serializer):
    userId = serializers.IntegerField(min_value=1)
    attended = serializers.BooleanField()
