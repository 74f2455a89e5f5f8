"""
List screen state: search/sort/page inputs, the create/edit form and the
two-step delete confirmation.

The controller owns a ``UserCollectionCache``; every successful mutation
invalidates it so the next ``view()`` re-pulls the collection.
"""
import logging
from typing import Any, Dict, Optional

from userdir.client.api_client import ApiError, UserApiClient
from userdir.client.cache import UserCollectionCache
from userdir.client.validation import to_payload, validate_user_form
from userdir.client.view import ViewParams, ViewResult, derive_view
from userdir.helpers.enums import SortDirection, SortField, UserRole
from userdir.schemas.sche_user import UserItemResponse

logger = logging.getLogger(__name__)

FORM_DEFAULTS = {
    'fullName': '',
    'email': '',
    'phone': '',
    'birthDate': '',
    'role': UserRole.USER.value,
    'position': '',
    'isActive': True,
}


class UserForm:
    def __init__(self, api: UserApiClient, cache: UserCollectionCache):
        self.api = api
        self.cache = cache
        self.is_open = False
        self.user_id: Optional[int] = None
        self.values: Dict[str, Any] = {}
        self.errors: Dict[str, str] = {}
        self.submit_error: Optional[str] = None

    @property
    def is_new(self) -> bool:
        return self.user_id is None

    def open_new(self):
        self._open(None, dict(FORM_DEFAULTS))

    def open_edit(self, user: UserItemResponse):
        self._open(user.id, {
            'fullName': user.full_name,
            'email': user.email,
            'phone': user.phone,
            'birthDate': user.birth_date.isoformat() if user.birth_date else '',
            'role': user.role.value,
            'position': user.position or '',
            'isActive': user.is_active,
        })

    def close(self):
        self.is_open = False
        self.user_id = None
        self.values = {}
        self.errors = {}
        self.submit_error = None

    def submit(self, values: Dict[str, Any] = None) -> Optional[UserItemResponse]:
        """
        Validate and send the form. Returns the saved user, or None when the form stays open.
        """
        if values is not None:
            self.values.update(values)
        self.submit_error = None

        model, self.errors = validate_user_form(self.values)
        if self.errors:
            return None

        payload = to_payload(model)
        try:
            if self.is_new:
                saved = self.api.create_user(payload)
            else:
                saved = self.api.update_user(self.user_id, payload)
        except ApiError as exc:
            logger.warning(f"Saving user failed: {exc.message}")
            self.errors = dict(exc.errors)
            self.submit_error = exc.message
            return None

        self.cache.invalidate()
        self.close()
        return saved

    def _open(self, user_id: Optional[int], values: Dict[str, Any]):
        self.close()
        self.is_open = True
        self.user_id = user_id
        self.values = values


class DeletionGuard:
    def __init__(self, api: UserApiClient, cache: UserCollectionCache):
        self.api = api
        self.cache = cache
        self.staged_id: Optional[int] = None
        self.error: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.staged_id is not None

    def request(self, user_id: int):
        self.staged_id = user_id
        self.error = None

    def cancel(self):
        self.staged_id = None

    def confirm(self) -> bool:
        if self.staged_id is None:
            return False
        user_id, self.staged_id = self.staged_id, None
        try:
            self.api.delete_user(user_id)
        except ApiError as exc:
            logger.warning(f"Deleting user {user_id} failed: {exc.message}")
            self.error = exc.message
            return False
        self.cache.invalidate()
        return True


class UserListController:
    def __init__(self, api: UserApiClient, page_size: int = None):
        self.api = api
        self.cache = UserCollectionCache(api.fetch_users)
        self.params = ViewParams() if page_size is None else ViewParams(page_size=page_size)
        self.form = UserForm(api, self.cache)
        self.deletion = DeletionGuard(api, self.cache)
        self.load_error: Optional[str] = None

    def set_search(self, text: str):
        self.params = self.params.model_copy(update={'search': text})

    def set_page(self, page_index: int):
        self.params = self.params.model_copy(update={'page_index': page_index})

    def set_page_size(self, page_size: int):
        self.params = ViewParams(**{**self.params.model_dump(), 'page_size': page_size})

    def set_sort(self, field: SortField, order: SortDirection):
        self.params = self.params.model_copy(update={'sort_by': SortField(field), 'order': SortDirection(order)})

    def request_sort(self, field: SortField):
        field = SortField(field)
        is_asc = self.params.sort_by == field and self.params.order == SortDirection.ASC
        order = SortDirection.DESC if is_asc else SortDirection.ASC
        self.params = self.params.model_copy(update={'sort_by': field, 'order': order})

    def view(self) -> Optional[ViewResult]:
        """
        Current page of rows, or None when the collection could not be fetched.
        """
        try:
            users = self.cache.get()
        except ApiError as exc:
            logger.error(f"Loading users failed: {exc.message}")
            self.load_error = exc.message
            return None
        self.load_error = None
        return derive_view(users, self.params)
