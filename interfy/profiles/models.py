import os

from django.conf import settings
from django.db import models
from django.utils import timezone


def _upload_to(folder, instance, filename):
    ext = os.path.splitext(filename)[1].lower()
    return f"{folder}/{instance.user_id}-{int(timezone.now().timestamp() * 1000)}{ext}"


def avatar_upload_to(instance, filename):
    return _upload_to('avatars', instance, filename)


def cover_photo_upload_to(instance, filename):
    return _upload_to('covers', instance, filename)


class Profile(models.Model):
    # Optional text fields are nullable: None means never provided, "" means cleared.
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE,
                                primary_key=True, related_name='profile')
    email = models.EmailField(blank=True)
    full_name = models.CharField(max_length=255, blank=True, null=True)
    professional_title = models.CharField(max_length=255, blank=True, null=True)
    employment_status = models.CharField(max_length=100, blank=True, null=True)
    avatar = models.FileField(upload_to=avatar_upload_to, blank=True, null=True)
    cover_photo = models.FileField(upload_to=cover_photo_upload_to, blank=True, null=True)
    onboarding_completed = models.BooleanField(default=False)
    terms_accepted = models.BooleanField(default=False)
    terms_accepted_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.full_name or self.email or f"Profile {self.user_id}"

    @classmethod
    def for_user(cls, user):
        """Fetch the user's profile, creating it on first use."""
        profile, _ = cls.objects.get_or_create(
            user=user,
            defaults={
                'email': user.email or '',
                'full_name': user.get_full_name() or None,
            },
        )
        return profile
