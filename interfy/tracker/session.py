import logging

logger = logging.getLogger(__name__)


class AuthSession:
    """
    Explicit session context handed to the record store and the synchronizer.

    Wraps a Django user (or nothing, when signed out) and notifies listeners
    whenever the signed-in user changes.
    """

    def __init__(self, user=None):
        self._user = user
        self._listeners = []

    @classmethod
    def from_request(cls, request):
        return cls(request.user)

    @property
    def user(self):
        if self._user is not None and self._user.is_authenticated:
            return self._user
        return None

    def current_user_id(self):
        user = self.user
        return user.pk if user is not None else None

    def on_change(self, callback):
        """
        Register `callback(user_id)` for sign-in/sign-out. Returns an unsubscribe callable.
        """
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def sign_in(self, user):
        self._set_user(user)

    def sign_out(self):
        self._set_user(None)

    def _set_user(self, user):
        previous = self.current_user_id()
        self._user = user
        current = self.current_user_id()
        if previous == current:
            return
        logger.info(f"Session user changed from {previous} to {current}")
        for callback in list(self._listeners):
            callback(current)
