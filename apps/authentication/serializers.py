"""
Authentication Serializers
"""

from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Public view of an account; never includes the password hash."""

    class Meta:
        model = User
        fields = [
            'id', 'email', 'name', 'role',
            'is_active', 'is_first_login',
            'date_joined', 'updated_at',
        ]
        read_only_fields = fields


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class FirstTimeLoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    temp_password = serializers.CharField(write_only=True, trim_whitespace=False)
    new_password = serializers.CharField(write_only=True, min_length=8, trim_whitespace=False)

    def validate_new_password(self, value):
        validate_password(value)
        return value

