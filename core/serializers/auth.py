import bleach
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers


def clean_text(v: str) -> str:
    return bleach.clean((v or '').strip(), strip=True)


class RegisterSerializer(serializers.Serializer):
    firstName = serializers.CharField(max_length=150)
    lastName = serializers.CharField(max_length=150)
    # Doubles as the username, which Django caps at 150 characters.
    email = serializers.EmailField(max_length=150)
    password = serializers.CharField(min_length=6, write_only=True)
    childBirthDate = serializers.DateField(required=False, allow_null=True)

    def validate_firstName(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('First name is required')
        return v

    def validate_lastName(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Last name is required')
        return v

    def validate_email(self, v):
        return v.strip().lower()

    def validate_password(self, v):
        validate_password(v)
        return v


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField()

    def validate_email(self, v):
        return v.strip().lower()

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('Password is required')
        return v
