from userdir.client.api_client import (ApiError, ApiNotFoundError, ApiServerError, ApiValidationError,
                                       UserApiClient)
from userdir.client.cache import UserCollectionCache
from userdir.client.controller import DeletionGuard, UserForm, UserListController
from userdir.client.validation import validate_user_form
from userdir.client.view import ViewParams, ViewResult, derive_view

__all__ = [
    'ApiError', 'ApiNotFoundError', 'ApiServerError', 'ApiValidationError', 'UserApiClient',
    'UserCollectionCache', 'DeletionGuard', 'UserForm', 'UserListController',
    'validate_user_form', 'ViewParams', 'ViewResult', 'derive_view',
]
