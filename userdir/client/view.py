"""
Derived view of the user collection: filter, then sort, then paginate.

Everything here is a pure function of its inputs, so the same collection and
parameters always give the same rows in the same order.
"""
import math
from typing import List, Sequence

from pydantic import BaseModel, conint

from userdir.core.config import settings
from userdir.helpers.enums import SortDirection, SortField
from userdir.schemas.sche_base import MetadataSchema
from userdir.schemas.sche_user import UserItemResponse

SEARCH_FIELDS = ('full_name', 'email', 'phone')


class ViewParams(BaseModel):
    search: str = ''
    sort_by: SortField = SortField.FULL_NAME
    order: SortDirection = SortDirection.ASC
    page_index: int = 0
    page_size: conint(gt=0) = settings.DEFAULT_PAGE_SIZE


class ViewResult(BaseModel):
    data: List[UserItemResponse]
    metadata: MetadataSchema

    @property
    def total(self) -> int:
        return self.metadata.total_items


def filter_users(users: Sequence[UserItemResponse], search: str) -> List[UserItemResponse]:
    if not search:
        return list(users)
    needle = search.lower()
    return [
        user for user in users
        if any(needle in (getattr(user, field) or '').lower() for field in SEARCH_FIELDS)
    ]


def sort_users(users: Sequence[UserItemResponse], sort_by: SortField,
               order: SortDirection) -> List[UserItemResponse]:
    attribute = SortField(sort_by).attribute
    # sorted() is stable in both directions, equal keys keep their filtered order
    return sorted(users, key=lambda user: getattr(user, attribute), reverse=SortDirection(order) == SortDirection.DESC)


def paginate_users(users: Sequence[UserItemResponse], page_index: int, page_size: int) -> List[UserItemResponse]:
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    if page_index < 0:
        return []
    start = page_index * page_size
    return list(users[start:start + page_size])


def page_count(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if total else 0


def derive_view(users: Sequence[UserItemResponse], params: ViewParams) -> ViewResult:
    matched = filter_users(users, params.search)
    ordered = sort_users(matched, params.sort_by, params.order)
    rows = paginate_users(ordered, params.page_index, params.page_size)
    return ViewResult(
        data=rows,
        metadata=MetadataSchema(
            current_page=params.page_index,
            page_size=params.page_size,
            total_items=len(matched),
            total_pages=page_count(len(matched), params.page_size),
        ),
    )
