from datetime import date, datetime
from typing import Annotated, Any, Dict, Iterable, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from userdir.helpers.enums import UserRole

FIELD_MESSAGES = {
    'fullName': {
        'required': 'Full name is required',
        'too_long': 'Full name should not exceed 100 characters',
    },
    'email': {
        'invalid': 'Invalid email',
    },
    'phone': {
        'required': 'Phone is required',
        'too_long': 'Phone should not exceed 20 characters',
    },
    'birthDate': {
        'invalid': 'Invalid date',
    },
    'role': {
        'invalid': 'Role must be one of: admin, user',
    },
    'position': {
        'too_long': 'Position should not exceed 255 characters',
    },
    'isActive': {
        'invalid': 'Active flag must be a boolean',
    },
}

REQUIRED_ERROR_TYPES = {'missing', 'string_too_short', 'value_error'}


def check_email(value: str) -> str:
    # Syntax check only, the submitted address is stored as given
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(str(e))
    return value


Email = Annotated[str, AfterValidator(check_email)]


class UserBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator('birth_date', 'position', mode='before', check_fields=False)
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip() == '':
            return None
        return value


class UserCreateRequest(UserBase):
    full_name: str = Field(..., min_length=1, max_length=100)
    email: Email
    phone: str = Field(..., min_length=1, max_length=20)
    birth_date: Optional[date] = None
    role: UserRole
    position: Optional[str] = Field(None, max_length=255)
    is_active: bool = True


class UserUpdateRequest(UserBase):
    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[Email] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=20)
    birth_date: Optional[date] = None
    role: Optional[UserRole] = None
    position: Optional[str] = Field(None, max_length=255)
    is_active: Optional[bool] = None

    @field_validator('full_name', 'email', 'phone', 'role', 'is_active')
    @classmethod
    def not_null(cls, value: Any) -> Any:
        # Only reached for explicitly supplied values; omitted fields keep their default
        if value is None:
            raise ValueError('must not be null')
        return value


class UserItemResponse(UserBase):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    full_name: str
    email: str
    phone: str
    birth_date: Optional[date] = None
    role: UserRole
    position: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


_ALIASES = {name: field.alias for name, field in UserCreateRequest.model_fields.items()}


def _error_kind(error_type: str) -> str:
    if error_type.endswith('_too_long'):
        return 'too_long'
    if error_type in REQUIRED_ERROR_TYPES:
        return 'required'
    return 'invalid'


def to_field_errors(errors: Iterable[Dict[str, Any]]) -> Dict[str, str]:
    """
    Collapse pydantic error entries into one message per wire field name.

    Request errors carry a location prefix ('body', 'path', 'query') which is dropped.
    The first error reported for a field wins.
    """
    field_errors: Dict[str, str] = {}
    for error in errors:
        loc = list(error.get('loc', ()))
        if loc and loc[0] in ('body', 'path', 'query'):
            loc = loc[1:]
        # Malformed JSON reports a character offset instead of a field name
        if loc and isinstance(loc[0], str):
            field = _ALIASES.get(loc[0], loc[0])
        else:
            field = 'body'
        if field in field_errors:
            continue
        messages = FIELD_MESSAGES.get(field, {})
        kind = _error_kind(error.get('type', ''))
        field_errors[field] = (
            messages.get(kind)
            or messages.get('invalid')
            or messages.get('required')
            or error.get('msg', 'Invalid value')
        )
    return field_errors
