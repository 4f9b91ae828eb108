import json
import logging

from django.db import DatabaseError
from django.http import HttpResponse
from django.utils import timezone
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from tracker.errors import AccountDeletionError, AuthError, BackendError
from tracker.views import error_response, get_synchronizer

from .models import Profile
from .serializers import OnboardingSerializer, ProfileSerializer
from .services import build_export, delete_account

# Configure logging
logger = logging.getLogger(__name__)


class ProfileAPIView(APIView):
    """Read, edit or delete the signed-in user's profile."""

    def get(self, request):
        profile = Profile.for_user(request.user)
        serializer = ProfileSerializer(profile, context={'request': request})
        return Response(serializer.data, status=status.HTTP_200_OK)

    def patch(self, request):
        profile = Profile.for_user(request.user)
        serializer = ProfileSerializer(profile, data=request.data, partial=True, context={'request': request})
        if not serializer.is_valid():
            return Response({"error": "Invalid profile data.", "details": serializer.errors},
                            status=status.HTTP_400_BAD_REQUEST)
        serializer.save()
        return Response(serializer.data, status=status.HTTP_200_OK)

    def delete(self, request):
        """
        Delete the account along with every interview and uploaded image it owns.
        """
        try:
            interview_count = delete_account(request.user)
        except AccountDeletionError as e:
            logger.error(f"Partial account deletion for user {request.user.pk}: {str(e)}")
            return Response(
                {"error": "account_deletion_incomplete", "message": str(e), "removed_files": e.removed_files},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        except BackendError as e:
            return error_response(e)
        return Response({"message": "Account deleted successfully", "interviews_deleted": interview_count},
                        status=status.HTTP_204_NO_CONTENT)


class ProfileImageUploadView(APIView):
    """Upload an avatar or cover photo; `field` is bound in urls.py."""
    parser_classes = [MultiPartParser, FormParser]
    field = 'avatar'

    def post(self, request):
        file = request.FILES.get('file')
        if not file:
            return Response({'error': 'file is required.'}, status=status.HTTP_400_BAD_REQUEST)
        content_type = getattr(file, 'content_type', '') or ''
        if not content_type.startswith('image/'):
            return Response({'error': 'Only image uploads are supported.'}, status=status.HTTP_400_BAD_REQUEST)

        profile = Profile.for_user(request.user)
        stored_file = getattr(profile, self.field)
        previous_name = stored_file.name or None
        try:
            stored_file.save(file.name, file, save=False)
            profile.save()
        except (OSError, DatabaseError) as e:
            logger.error(f"Error uploading {self.field} for user {request.user.pk}: {str(e)}")
            return Response({'error': f"Failed to upload {self.field}."},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        # the profile now points at the new file
        if previous_name:
            try:
                stored_file.storage.delete(previous_name)
            except OSError as e:
                logger.warning(f"Could not remove previous {self.field} {previous_name}: {str(e)}")

        logger.info(f"{self.field} updated for user {request.user.pk}")
        serializer = ProfileSerializer(profile, context={'request': request})
        return Response(serializer.data, status=status.HTTP_200_OK)


class OnboardingAPIView(APIView):
    def post(self, request):
        """Record terms acceptance and mark onboarding as completed."""
        serializer = OnboardingSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": "Terms must be accepted.", "details": serializer.errors},
                            status=status.HTTP_400_BAD_REQUEST)

        profile = Profile.for_user(request.user)
        profile.terms_accepted = True
        profile.terms_accepted_at = timezone.now()
        profile.onboarding_completed = True
        profile.save(update_fields=['terms_accepted', 'terms_accepted_at', 'onboarding_completed', 'updated_at'])
        return Response(ProfileSerializer(profile, context={'request': request}).data, status=status.HTTP_200_OK)


class ExportDataAPIView(APIView):
    def get(self, request):
        """Download the user's profile and interviews as a JSON file."""
        synchronizer = get_synchronizer(request)
        try:
            interviews = synchronizer.fetch(request.user.pk)
        except (AuthError, BackendError) as e:
            return error_response(e)

        export = build_export(Profile.for_user(request.user), interviews)
        response = HttpResponse(json.dumps(export, indent=2), content_type='application/json')
        filename = f"interfy-export-{timezone.now().date().isoformat()}.json"
        response['Content-Disposition'] = f'attachment; filename="{filename}"'
        return response
