"""
HTTP client for the user endpoints.

Wraps an ``httpx.Client`` and turns responses into ``UserItemResponse`` objects.
Error responses are mapped onto the ``ApiError`` hierarchy so callers never
inspect status codes themselves.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from userdir.core.config import settings
from userdir.schemas.sche_user import UserItemResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code: Optional[int] = None

    def __init__(self, message: str, status_code: Optional[int] = None,
                 errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code if status_code is not None else self.status_code
        self.errors = errors or {}


class ApiValidationError(ApiError):
    status_code = 400


class ApiNotFoundError(ApiError):
    status_code = 404


class ApiServerError(ApiError):
    status_code = 500


class UserApiClient:
    def __init__(self, base_url: str = None, client: httpx.Client = None, timeout: float = None):
        self.base_url = (base_url if base_url is not None else settings.API_URL).rstrip('/')
        self.client = client or httpx.Client(
            timeout=timeout if timeout is not None else settings.API_TIMEOUT_SECONDS
        )

    @property
    def users_url(self) -> str:
        return f"{self.base_url}/users"

    def fetch_users(self) -> List[UserItemResponse]:
        response = self._request('GET', self.users_url)
        return [UserItemResponse.model_validate(item) for item in response.json()]

    def fetch_user(self, user_id: int) -> UserItemResponse:
        response = self._request('GET', f"{self.users_url}/{user_id}")
        return UserItemResponse.model_validate(response.json())

    def create_user(self, data: Dict[str, Any]) -> UserItemResponse:
        response = self._request('POST', self.users_url, json=data)
        return UserItemResponse.model_validate(response.json())

    def update_user(self, user_id: int, data: Dict[str, Any]) -> UserItemResponse:
        response = self._request('PUT', f"{self.users_url}/{user_id}", json=data)
        return UserItemResponse.model_validate(response.json())

    def delete_user(self, user_id: int) -> None:
        self._request('DELETE', f"{self.users_url}/{user_id}")

    def close(self):
        self.client.close()

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = self.client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error(f"{method} {url} failed: {exc}")
            raise ApiServerError(f"Could not reach the user service: {exc}") from exc

        if response.is_success:
            return response
        raise self._to_error(response)

    @staticmethod
    def _to_error(response: httpx.Response) -> ApiError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        message = body.get('message') or response.reason_phrase or 'Request failed'
        errors = body.get('errors') or {}

        if response.status_code == 404:
            return ApiNotFoundError(message, errors=errors)
        if 400 <= response.status_code < 500:
            return ApiValidationError(message, status_code=response.status_code, errors=errors)
        return ApiServerError(message, status_code=response.status_code)
