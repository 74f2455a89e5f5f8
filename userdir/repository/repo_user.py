from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from userdir.db.base import get_db
from userdir.models.model_user import User


class DuplicateEmailError(Exception):
    pass


def utcnow() -> datetime:
    # Columns hold naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UserRepository:
    def __init__(self, db_session: Session = Depends(get_db)):
        self.db = db_session

    def get_all(self) -> List[User]:
        return self.db.query(User).order_by(User.id.asc()).all()

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def create(self, user_data: Dict[str, Any]) -> User:
        now = utcnow()
        user = User(**user_data, created_at=now, updated_at=now)
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        return user

    def update(self, user: User, changes: Dict[str, Any]) -> User:
        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = max(utcnow(), user.created_at)
        self._commit()
        self.db.refresh(user)
        return user

    def delete(self, user_id: int) -> bool:
        user = self.get_by_id(user_id)
        if user:
            self.db.delete(user)
            self._commit()
            return True
        return False

    def _commit(self):
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # The only unique column besides the primary key
            raise DuplicateEmailError(str(e.orig)) from e
        except Exception:
            self.db.rollback()
            raise
