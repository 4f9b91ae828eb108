import logging

from django.db import DatabaseError, transaction
from django.utils import timezone

from tracker.errors import AccountDeletionError, BackendError
from tracker.models import Interview

from .models import Profile

# Configure logging
logger = logging.getLogger(__name__)


def build_export(profile, interviews):
    """
    Assemble the downloadable copy of a user's data.

    Args:
        profile (Profile): The user's profile.
        interviews (list): Interview documents from the user's snapshot.

    Returns:
        dict: Profile summary, interviews, export timestamp and interview count.
    """
    return {
        "profile": {
            "email": profile.email,
            "full_name": profile.full_name,
            "professional_title": profile.professional_title,
            "employment_status": profile.employment_status,
            "created_at": profile.created_at.isoformat() if profile.created_at else None,
        },
        "interviews": interviews,
        "export_date": timezone.now().isoformat(),
        "total_interviews": len(interviews),
    }


def delete_account(user):
    """
    Remove a user's uploaded images, interviews, profile and account.

    Images go first. If that fails before anything was removed, nothing else is
    touched and BackendError is raised. The database rows are then deleted in a
    single transaction; a failure there after images were removed raises
    AccountDeletionError.
    """
    profile = Profile.objects.filter(user=user).first()
    stored_files = []
    if profile is not None:
        stored_files = [f for f in (profile.avatar, profile.cover_photo) if f]

    removed = []
    for stored_file in stored_files:
        try:
            stored_file.storage.delete(stored_file.name)
        except OSError as e:
            logger.error(f"Error removing {stored_file.name} for user {user.pk}: {str(e)}")
            if removed:
                raise AccountDeletionError(
                    f"Account deletion incomplete: removed {removed} but failed on {stored_file.name}.",
                    removed_files=removed,
                ) from e
            raise BackendError(f"Failed to remove uploaded images: {str(e)}") from e
        removed.append(stored_file.name)

    try:
        interview_count = _delete_records(user)
    except DatabaseError as e:
        logger.error(f"Error deleting records for user {user.pk}: {str(e)}")
        if removed:
            raise AccountDeletionError(
                f"Account deletion incomplete: images removed but records remain ({str(e)}).",
                removed_files=removed,
            ) from e
        raise BackendError(f"Failed to delete account: {str(e)}") from e

    logger.info(f"Deleted account {user.pk}: {interview_count} interviews, {len(removed)} images")
    return interview_count


def _delete_records(user):
    with transaction.atomic():
        interview_count, _ = Interview.objects.filter(user=user).delete()
        Profile.objects.filter(user=user).delete()
        user.delete()
    return interview_count
