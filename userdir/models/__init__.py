from userdir.models.model_base import Base
from userdir.models.model_user import User

__all__ = ['Base', 'User']
