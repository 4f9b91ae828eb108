# profiles/signals.py

import logging

from django.contrib.auth.signals import user_logged_in
from django.dispatch import receiver

from .models import Profile

logger = logging.getLogger(__name__)


@receiver(user_logged_in)
def ensure_profile_on_login(sender, request, user, **kwargs):
    profile = Profile.for_user(user)
    logger.debug(f"Profile ready for user {profile.user_id}")
