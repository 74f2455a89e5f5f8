from sqlalchemy import Boolean, Column, Date, DateTime, Enum, Integer, String, func

from userdir.helpers.enums import UserRole
from userdir.models.model_base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    full_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(20), nullable=False)
    birth_date = Column(Date, nullable=True)
    role = Column(Enum(UserRole, name='user_role', values_callable=lambda roles: [r.value for r in roles]),
                  nullable=False, default=UserRole.USER)
    position = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=func.now())
    updated_at = Column(DateTime, nullable=False, default=func.now())

    def __repr__(self):
        return f"<User id={self.id} email={self.email!r}>"
