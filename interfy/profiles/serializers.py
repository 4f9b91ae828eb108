from rest_framework import serializers

from .models import Profile


class ProfileSerializer(serializers.ModelSerializer):
    """
    Serializer for Profile model. Image fields are exposed as absolute URLs.
    """
    avatar_url = serializers.SerializerMethodField()
    cover_photo_url = serializers.SerializerMethodField()

    class Meta:
        model = Profile
        fields = [
            'email', 'full_name', 'professional_title', 'employment_status',
            'avatar_url', 'cover_photo_url', 'onboarding_completed',
            'terms_accepted', 'terms_accepted_at', 'created_at', 'updated_at'
        ]
        read_only_fields = [
            'email', 'onboarding_completed', 'terms_accepted', 'terms_accepted_at',
            'created_at', 'updated_at'
        ]

    def get_avatar_url(self, obj):
        return self._file_url(obj.avatar)

    def get_cover_photo_url(self, obj):
        return self._file_url(obj.cover_photo)

    def _file_url(self, stored_file):
        if not stored_file:
            return None
        request = self.context.get('request')
        if request is not None:
            return request.build_absolute_uri(stored_file.url)
        return stored_file.url


class OnboardingSerializer(serializers.Serializer):
    terms_accepted = serializers.BooleanField()

    def validate_terms_accepted(self, value):
        if not value:
            raise serializers.ValidationError("You must accept the terms to continue.")
        return value
