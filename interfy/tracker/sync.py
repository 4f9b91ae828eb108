import logging

from .errors import AuthError, BackendError, ValidationError
from .serializers import InterviewDraftSerializer

logger = logging.getLogger(__name__)

COLLECTION = 'interviews'
OWNER_FIELD = 'user_id'


class Subscription:
    """Handle for a live interview subscription. `unsubscribe()` may be called any number of times."""

    def __init__(self, on_close):
        self._on_close = on_close
        self._release = None
        self._closed = False

    @property
    def active(self):
        return not self._closed

    def _attach(self, release):
        self._release = release
        if self._closed:
            release()

    def unsubscribe(self):
        if self._closed:
            return
        self._closed = True
        if self._release is not None:
            self._release()
        self._on_close(self)


class InterviewSynchronizer:
    """
    Live, user-scoped mirror of interview records.

    The subscription is the single source of truth for the list: mutations
    return once the store acknowledges them, and the change shows up in a
    later snapshot. Consumers read `interviews` (a copy) or the listener
    argument and never mutate the held list.
    """

    def __init__(self, session, store):
        self.session = session
        self.store = store
        self._interviews = []
        self._subscription = None
        self._stop_following = None

    @property
    def interviews(self):
        return list(self._interviews)

    @property
    def subscribed(self):
        return self._subscription is not None

    def subscribe(self, user_id, listener, order_by=None):
        """
        Subscribe to every interview owned by `user_id`, tearing down any previous subscription.

        `listener(interviews, error)` receives the full list on every change. On a
        failed delivery it receives the last-known list together with the error.
        """
        handle = self.store.query(COLLECTION, {OWNER_FIELD: user_id}, order_by)
        self.unsubscribe()
        self._interviews = []

        subscription = Subscription(self._forget)

        def on_snapshot(documents, error):
            if not subscription.active:
                return
            if error is not None:
                logger.error(f"Interview subscription for user {user_id} failed: {str(error)}")
                listener(self.interviews, error)
                return
            self._interviews = list(documents)
            listener(self.interviews, None)

        self._subscription = subscription
        try:
            subscription._attach(self.store.subscribe(handle, on_snapshot))
        except Exception:
            subscription.unsubscribe()
            raise
        logger.info(f"Subscribed to interviews of user {user_id}")
        return subscription

    def unsubscribe(self):
        if self._subscription is not None:
            self._subscription.unsubscribe()

    def _forget(self, subscription):
        if self._subscription is subscription:
            self._subscription = None

    def follow_session(self, listener, order_by=None):
        """
        Keep the subscription pointed at whoever is signed in to the session.
        """
        self.stop_following()

        def on_user_change(user_id):
            if user_id is None:
                self.unsubscribe()
                self._interviews = []
            else:
                self.subscribe(user_id, listener, order_by)

        self._stop_following = self.session.on_change(on_user_change)
        user_id = self.session.current_user_id()
        if user_id is not None:
            self.subscribe(user_id, listener, order_by)

    def stop_following(self):
        if self._stop_following is not None:
            self._stop_following()
            self._stop_following = None

    def close(self):
        self.stop_following()
        self.unsubscribe()

    def fetch(self, user_id, order_by=None):
        """
        One-shot snapshot of a user's interviews. Leaves the live subscription alone.
        """
        handle = self.store.query(COLLECTION, {OWNER_FIELD: user_id}, order_by)
        deliveries = []
        release = self.store.subscribe(handle, lambda documents, error: deliveries.append((documents, error)))
        release()

        if not deliveries:
            raise BackendError("The record store delivered no snapshot.")
        documents, error = deliveries[0]
        if error is not None:
            raise error
        return list(documents)

    def create(self, draft):
        serializer = InterviewDraftSerializer(data=draft)
        if not serializer.is_valid():
            raise ValidationError(serializer.errors)

        user_id = self._require_user()
        document = dict(serializer.validated_data)
        document[OWNER_FIELD] = user_id
        interview_id = self.store.insert(COLLECTION, document)
        logger.info(f"Interview {interview_id} created for user {user_id}")
        return interview_id

    def update(self, interview_id, patch):
        serializer = InterviewDraftSerializer(data=patch, partial=True)
        if not serializer.is_valid():
            raise ValidationError(serializer.errors)

        user_id = self._require_user()
        self.store.update(COLLECTION, str(interview_id), dict(serializer.validated_data))
        logger.info(f"Interview {interview_id} updated by user {user_id}: {sorted(serializer.validated_data)}")

    def delete(self, interview_id):
        user_id = self._require_user()
        self.store.remove(COLLECTION, str(interview_id))
        logger.info(f"Interview {interview_id} deleted by user {user_id}")

    def _require_user(self):
        user_id = self.session.current_user_id()
        if user_id is None:
            raise AuthError("No active session.")
        return user_id
