import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from . import derived
from .errors import AuthError, BackendError, NotFoundError, ValidationError
from .session import AuthSession
from .store import DjangoRecordStore
from .sync import InterviewSynchronizer

logger = logging.getLogger(__name__)


def get_synchronizer(request):
    """Build a synchronizer bound to the requesting user's session."""
    session = AuthSession.from_request(request)
    return InterviewSynchronizer(session, DjangoRecordStore(session))


def error_response(error):
    """Map a tracker error to an API response."""
    if isinstance(error, ValidationError):
        return Response({"error": "Invalid interview data.", "details": error.detail},
                        status=status.HTTP_400_BAD_REQUEST)
    if isinstance(error, AuthError):
        return Response({"error": str(error)}, status=status.HTTP_403_FORBIDDEN)
    if isinstance(error, NotFoundError):
        return Response({"error": str(error)}, status=status.HTTP_404_NOT_FOUND)
    logger.error(f"Record store failure: {str(error)}")
    return Response({"error": str(error)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class InterviewListAPIView(APIView):
    def get(self, request):
        """
        List the user's interviews, newest first, narrowed by `search`, `status` and `priority`.
        """
        synchronizer = get_synchronizer(request)
        try:
            interviews = synchronizer.fetch(request.user.pk, order_by='-interview_date')
        except (AuthError, BackendError) as e:
            return error_response(e)

        filtered = derived.filter_interviews(
            interviews,
            search=request.query_params.get("search", ""),
            status=request.query_params.get("status", derived.ALL),
            priority=request.query_params.get("priority", derived.ALL),
        )
        return Response(filtered, status=status.HTTP_200_OK)

    def post(self, request):
        """Create an interview owned by the requesting user."""
        synchronizer = get_synchronizer(request)
        try:
            interview_id = synchronizer.create(request.data)
        except (ValidationError, AuthError, BackendError) as e:
            return error_response(e)
        return Response({"id": interview_id}, status=status.HTTP_201_CREATED)


class InterviewDetailView(APIView):
    def get(self, request, interview_id):
        synchronizer = get_synchronizer(request)
        try:
            interview = self._find(synchronizer, request.user.pk, interview_id)
        except (AuthError, BackendError) as e:
            return error_response(e)
        return Response(interview, status=status.HTTP_200_OK)

    def patch(self, request, interview_id):
        synchronizer = get_synchronizer(request)
        try:
            synchronizer.update(interview_id, request.data)
            interview = self._find(synchronizer, request.user.pk, interview_id)
        except (ValidationError, AuthError, BackendError) as e:
            return error_response(e)
        return Response(interview, status=status.HTTP_200_OK)

    def delete(self, request, interview_id):
        synchronizer = get_synchronizer(request)
        try:
            synchronizer.delete(interview_id)
        except (AuthError, BackendError) as e:
            return error_response(e)
        return Response({"message": "Interview deleted successfully"}, status=status.HTTP_204_NO_CONTENT)

    @staticmethod
    def _find(synchronizer, user_id, interview_id):
        for interview in synchronizer.fetch(user_id):
            if interview["id"] == str(interview_id):
                return interview
        raise NotFoundError(f"Interview with ID {interview_id} not found")


class DashboardAPIView(APIView):
    def get(self, request):
        """
        Status counts over all interviews plus the upcoming pending ones, optionally searched.
        """
        synchronizer = get_synchronizer(request)
        try:
            interviews = synchronizer.fetch(request.user.pk)
        except (AuthError, BackendError) as e:
            return error_response(e)

        pending = derived.select_pending(interviews)
        return Response({
            "stats": derived.compute_stats(interviews),
            "pending": derived.filter_by_search(pending, request.query_params.get("search", "")),
        }, status=status.HTTP_200_OK)
