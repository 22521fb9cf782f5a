"""
Serializers for signup, login and the current-user payload.
"""
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .models import EMOJI_CHOICES, DEFAULT_EMOJI, Profile

User = get_user_model()


class ProfileSerializer(serializers.ModelSerializer):
    is_leader = serializers.BooleanField(read_only=True)

    class Meta:
        model = Profile
        fields = ["display_name", "role", "emoji_key", "avatar_url", "is_leader", "created_at"]
        read_only_fields = ["role", "created_at"]

    def validate_emoji_key(self, value):
        if value not in EMOJI_CHOICES:
            raise serializers.ValidationError("Pick one of the offered emojis.")
        return value


class UserSerializer(serializers.ModelSerializer):
    profile = ProfileSerializer(read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "profile"]
        read_only_fields = fields


class SignupSerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=150)  # doubles as the 150-char username
    password = serializers.CharField(write_only=True, trim_whitespace=False, style={"input_type": "password"})
    full_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    emoji_key = serializers.CharField(required=False, default=DEFAULT_EMOJI)

    def validate_email(self, value: str) -> str:
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exists() or User.objects.filter(username=value).exists():
            raise serializers.ValidationError("An account with this email already exists.")
        return value

    def validate_emoji_key(self, value: str) -> str:
        if value not in EMOJI_CHOICES:
            raise serializers.ValidationError("Pick one of the offered emojis.")
        return value

    def validate(self, attrs):
        # Run Django's password validators with user context so similarity checks work
        pseudo_user = User(username=attrs["email"], email=attrs["email"])
        validate_password(attrs["password"], user=pseudo_user)
        return attrs

    def create(self, validated_data):
        user = User(username=validated_data["email"], email=validated_data["email"])
        user.set_password(validated_data["password"])
        user.save()

        profile = user.profile
        profile.display_name = validated_data.get("full_name", "").strip()
        profile.emoji_key = validated_data.get("emoji_key") or DEFAULT_EMOJI
        profile.save(update_fields=["display_name", "emoji_key"])
        return user

    def to_representation(self, instance):
        return UserSerializer(instance).data


class EmailTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Login using email + password and return SimpleJWT refresh/access tokens.
    POST body: {"email": "...", "password": "..."}
    """
    email = serializers.EmailField(write_only=True)
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Remove the parent-added username field so the browsable form shows only Email + Password.
        self.fields.pop(self.username_field, None)

    def validate(self, attrs):
        user = authenticate_email(attrs.get("email"), attrs.get("password"))
        if user is None:
            raise AuthenticationFailed("No active account found with the given credentials")

        refresh = self.get_token(user)
        return {"refresh": str(refresh), "access": str(refresh.access_token)}


class SessionLoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


def authenticate_email(email, password):
    """Return the active user matching email + password, or None."""
    if not email or not password:
        return None
    try:
        user = User.objects.get(email__iexact=email.strip())
    except (User.DoesNotExist, User.MultipleObjectsReturned):
        return None
    if not user.is_active or not user.check_password(password):
        return None
    return user
