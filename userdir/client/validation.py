from typing import Any, Dict, Optional, Tuple, Union

from pydantic import ValidationError

from userdir.schemas.sche_user import UserCreateRequest, UserUpdateRequest, to_field_errors

FormModel = Union[UserCreateRequest, UserUpdateRequest]


def validate_user_form(data: Dict[str, Any], partial: bool = False) -> Tuple[Optional[FormModel], Dict[str, str]]:
    """
    Validate a candidate user record before it is submitted.

    Returns ``(model, {})`` when the record is valid and ``(None, errors)`` otherwise,
    where ``errors`` maps each failing wire field name to its message.
    ``partial`` validates an update payload, in which omitted fields are allowed.
    """
    schema = UserUpdateRequest if partial else UserCreateRequest
    try:
        return schema.model_validate(data), {}
    except ValidationError as exc:
        return None, to_field_errors(exc.errors())


def to_payload(model: FormModel) -> Dict[str, Any]:
    return model.model_dump(mode='json', by_alias=True, exclude_unset=isinstance(model, UserUpdateRequest))
