import logging
from typing import List

from fastapi import Depends

from userdir.helpers.exception_handler import CustomException
from userdir.models.model_user import User
from userdir.repository.repo_user import DuplicateEmailError, UserRepository
from userdir.schemas.sche_user import UserCreateRequest, UserUpdateRequest

logger = logging.getLogger(__name__)

EMAIL_EXISTS_MESSAGE = 'Email already exists'


class UserService:
    def __init__(self, user_repo: UserRepository = Depends()):
        self.user_repo = user_repo

    def get_users(self) -> List[User]:
        return self.user_repo.get_all()

    def get(self, user_id: int) -> User:
        user = self.user_repo.get_by_id(user_id)
        if not user:
            raise CustomException(http_code=404, code='404', message='User not found')
        return user

    def create_user(self, data: UserCreateRequest) -> User:
        if self.user_repo.get_by_email(data.email):
            raise CustomException(http_code=400, code='400', message=EMAIL_EXISTS_MESSAGE,
                                  errors={'email': EMAIL_EXISTS_MESSAGE})
        try:
            user = self.user_repo.create(data.model_dump())
        except DuplicateEmailError:
            logger.warning(f"Concurrent insert won the email {data.email}")
            raise CustomException(http_code=400, code='400', message=EMAIL_EXISTS_MESSAGE,
                                  errors={'email': EMAIL_EXISTS_MESSAGE})
        logger.info(f"User created: id={user.id}")
        return user

    def update_user(self, user_id: int, data: UserUpdateRequest) -> User:
        """
        Merge the supplied fields into an existing user.

        Fields absent from the request body are left untouched; an unknown id is
        reported as not found before anything else is checked.
        """
        user = self.get(user_id)
        changes = data.model_dump(exclude_unset=True)

        new_email = changes.get('email')
        if new_email is not None and new_email != user.email:
            existing = self.user_repo.get_by_email(new_email)
            if existing and existing.id != user.id:
                raise CustomException(http_code=400, code='400', message=EMAIL_EXISTS_MESSAGE,
                                      errors={'email': EMAIL_EXISTS_MESSAGE})

        try:
            updated_user = self.user_repo.update(user, changes)
        except DuplicateEmailError:
            raise CustomException(http_code=400, code='400', message=EMAIL_EXISTS_MESSAGE,
                                  errors={'email': EMAIL_EXISTS_MESSAGE})
        logger.info(f"User updated: id={user_id} fields={sorted(changes)}")
        return updated_user

    def delete_user(self, user_id: int) -> None:
        if not self.user_repo.delete(user_id):
            raise CustomException(http_code=404, code='404', message='User not found')
        logger.info(f"User deleted: id={user_id}")
