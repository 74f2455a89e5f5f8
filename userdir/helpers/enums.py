import enum


class UserRole(str, enum.Enum):
    ADMIN = 'admin'
    USER = 'user'


class SortField(str, enum.Enum):
    FULL_NAME = 'fullName'
    EMAIL = 'email'
    PHONE = 'phone'
    ROLE = 'role'

    @property
    def attribute(self) -> str:
        return {
            SortField.FULL_NAME: 'full_name',
            SortField.EMAIL: 'email',
            SortField.PHONE: 'phone',
            SortField.ROLE: 'role',
        }[self]


class SortDirection(str, enum.Enum):
    ASC = 'asc'
    DESC = 'desc'
