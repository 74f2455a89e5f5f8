import logging
from typing import Any, List

from fastapi import APIRouter, Depends, Response, status

from userdir.helpers.exception_handler import INTERNAL_ERROR_MESSAGE, CustomException
from userdir.schemas.sche_user import UserCreateRequest, UserItemResponse, UserUpdateRequest
from userdir.services.srv_user import UserService

logger = logging.getLogger(__name__)
router = APIRouter()


def _internal_error() -> CustomException:
    return CustomException(http_code=500, code='500', message=INTERNAL_ERROR_MESSAGE)


@router.get("", response_model=List[UserItemResponse])
def get_users(user_service: UserService = Depends()) -> Any:
    """
    API Get list User, in insertion order
    """
    try:
        users = user_service.get_users()
        logger.info(f"get_users success: {len(users)} users")
        return users
    except Exception as e:
        logger.error(f"get_users error: {str(e)}", exc_info=True)
        raise _internal_error()


@router.get("/{user_id}", response_model=UserItemResponse)
def get_user(user_id: int, user_service: UserService = Depends()) -> Any:
    """
    API get Detail User
    """
    try:
        return user_service.get(user_id)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"get_user error: user_id={user_id} {str(e)}", exc_info=True)
        raise _internal_error()


@router.post("", response_model=UserItemResponse, status_code=status.HTTP_201_CREATED)
def create_user(user_data: UserCreateRequest, user_service: UserService = Depends()) -> Any:
    """
    API Create User

    Rejects a duplicate email with 400; the store is left unchanged.
    """
    try:
        logger.info(f"create_user request: {user_data.email}")
        return user_service.create_user(user_data)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"create_user error: {str(e)}", exc_info=True)
        raise _internal_error()


@router.put("/{user_id}", response_model=UserItemResponse)
def update_user(user_id: int, user_data: UserUpdateRequest, user_service: UserService = Depends()) -> Any:
    """
    API Update User, merging only the supplied fields
    """
    try:
        logger.info(f"update_user request: user_id={user_id}")
        return user_service.update_user(user_id, user_data)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"update_user error: user_id={user_id} {str(e)}", exc_info=True)
        raise _internal_error()


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_user(user_id: int, user_service: UserService = Depends()) -> Response:
    """
    API Delete User permanently
    """
    try:
        logger.info(f"delete_user request: user_id={user_id}")
        user_service.delete_user(user_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"delete_user error: user_id={user_id} {str(e)}", exc_info=True)
        raise _internal_error()
