import abc
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError
from django.db.models.signals import post_delete, post_save

from .errors import AuthError, BackendError, NotFoundError
from .models import Interview
from .serializers import InterviewSerializer

logger = logging.getLogger(__name__)

DEFAULT_COLLECTIONS = {
    'interviews': (Interview, InterviewSerializer),
}


@dataclass
class QueryHandle:
    collection: str
    filters: Dict[str, object] = field(default_factory=dict)
    order_by: Optional[str] = None


class RecordStore(abc.ABC):
    """
    Document store reachable by query, with realtime notification per query.

    Documents are plain dicts carrying a store-assigned `id` and timestamp fields.
    """

    @abc.abstractmethod
    def query(self, collection: str, filters: dict, order_by: Optional[str] = None) -> QueryHandle:
        ...

    @abc.abstractmethod
    def subscribe(self, handle: QueryHandle, on_snapshot: Callable) -> Callable[[], None]:
        """
        Deliver `on_snapshot(documents, None)` now and after every matching change.

        On failure `on_snapshot(None, error)` is delivered and the subscription stays open.
        Returns an unsubscribe callable.
        """

    @abc.abstractmethod
    def insert(self, collection: str, doc: dict) -> str:
        ...

    @abc.abstractmethod
    def update(self, collection: str, document_id: str, patch: dict) -> None:
        ...

    @abc.abstractmethod
    def remove(self, collection: str, document_id: str) -> None:
        ...


class DjangoRecordStore(RecordStore):
    """
    Record store backed by the Django ORM.

    Change notification comes from `post_save`/`post_delete` signals. Access is
    restricted to documents owned by the session's user.
    """
    owner_field = 'user_id'
    timestamp_field = 'updated_at'

    def __init__(self, session, collections=None):
        self.session = session
        self.collections = collections or DEFAULT_COLLECTIONS

    def query(self, collection, filters, order_by=None):
        self._collection(collection)
        owner_id = self._owner_id()
        if str(filters.get(self.owner_field)) != str(owner_id):
            raise AuthError(f"Permission denied: queries on '{collection}' must be scoped to the signed-in user.")
        return QueryHandle(collection, dict(filters), order_by)

    def fetch(self, handle: QueryHandle) -> List[dict]:
        model, serializer_class = self._collection(handle.collection)
        queryset = model.objects.filter(**handle.filters).order_by(handle.order_by or 'created_at')
        try:
            return [dict(document) for document in serializer_class(queryset, many=True).data]
        except DatabaseError as e:
            raise BackendError(f"Failed to load '{handle.collection}': {str(e)}") from e

    def subscribe(self, handle, on_snapshot):
        model, _ = self._collection(handle.collection)
        released = False

        def deliver():
            try:
                documents = self.fetch(handle)
            except BackendError as e:
                logger.error(f"Snapshot delivery failed for '{handle.collection}': {str(e)}")
                on_snapshot(None, e)
            else:
                on_snapshot(documents, None)

        def on_change(sender, instance, **kwargs):
            if released or not self._matches(instance, handle.filters):
                return
            # the write has already happened; a failing listener must not fail it
            try:
                deliver()
            except Exception:
                logger.exception(f"Snapshot listener for '{handle.collection}' raised")

        post_save.connect(on_change, sender=model, weak=False)
        post_delete.connect(on_change, sender=model, weak=False)

        def unsubscribe():
            nonlocal released
            if released:
                return
            released = True
            post_save.disconnect(on_change, sender=model)
            post_delete.disconnect(on_change, sender=model)

        try:
            deliver()
        except Exception:
            unsubscribe()
            raise
        return unsubscribe

    def insert(self, collection, doc):
        model, _ = self._collection(collection)
        owner_id = self._owner_id()
        if str(doc.get(self.owner_field)) != str(owner_id):
            raise AuthError("Permission denied: documents must be owned by the signed-in user.")

        instance = model(**doc)
        self._save(instance, collection)
        return str(instance.pk)

    def update(self, collection, document_id, patch):
        if self.owner_field in patch:
            raise AuthError(f"Permission denied: '{self.owner_field}' cannot be changed.")
        model, _ = self._collection(collection)
        writable = {f.name for f in model._meta.concrete_fields if not f.primary_key}
        unknown = sorted(set(patch) - writable)
        if unknown:
            raise BackendError(f"'{collection}' has no writable fields {unknown}.")
        instance = self._get_owned(collection, document_id)
        for name, value in patch.items():
            setattr(instance, name, value)
        self._save(instance, collection, update_fields=[*patch, self.timestamp_field])

    def remove(self, collection, document_id):
        instance = self._get_owned(collection, document_id)
        try:
            instance.delete()
        except DatabaseError as e:
            raise BackendError(f"Failed to delete '{document_id}' from '{collection}': {str(e)}") from e

    def _collection(self, name):
        try:
            return self.collections[name]
        except KeyError:
            raise BackendError(f"Unknown collection: {name}") from None

    def _owner_id(self):
        owner_id = self.session.current_user_id()
        if owner_id is None:
            raise AuthError("No active session.")
        return owner_id

    def _get_owned(self, collection, document_id):
        model, _ = self._collection(collection)
        owner_id = self._owner_id()
        try:
            return model.objects.get(pk=document_id, **{self.owner_field: owner_id})
        except (model.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError(f"No document '{document_id}' in '{collection}'.") from None
        except DatabaseError as e:
            raise BackendError(f"Failed to load '{document_id}' from '{collection}': {str(e)}") from e

    def _save(self, instance, collection, update_fields=None):
        try:
            instance.full_clean()
            instance.save(update_fields=update_fields)
        except (DjangoValidationError, ValueError) as e:
            messages = getattr(e, 'messages', [str(e)])
            raise BackendError(f"'{collection}' rejected the document: {messages}") from e
        except DatabaseError as e:
            raise BackendError(f"Failed to write to '{collection}': {str(e)}") from e

    @staticmethod
    def _matches(instance, filters):
        return all(str(getattr(instance, name, None)) == str(value) for name, value in filters.items())
