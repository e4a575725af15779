"""Opaque keyset cursor for deal listings.

A cursor remembers the sort key and id of the last deal on a page. The next
page starts strictly after that (key, id) pair, so ordering stays stable even
when scores change between requests.
"""

import base64
import binascii
from datetime import datetime
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError

from hotdeals.domain.error import InvalidCursorError
from hotdeals.domain.value.common import ValueObject
from hotdeals.domain.value.timestamps import UtcDatetime
from hotdeals.domain.value.types import DealSortField, SortOrder

SortKey = int | float | datetime


class DealCursor(ValueObject):
    """Position after the last deal of a page."""

    sort_by: DealSortField
    order: SortOrder
    key: int | float | UtcDatetime
    deal_id: UUID

    def encode(self) -> str:
        """Serialize to a URL-safe token."""
        raw = self.model_dump_json().encode("utf-8")
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")

    @classmethod
    def decode(
        cls, token: str, sort_by: DealSortField, order: SortOrder
    ) -> "DealCursor":
        """Parse a token produced by :meth:`encode`.

        Args:
            token: Cursor token
            sort_by: Sort field of the current request
            order: Sort order of the current request

        Returns:
            Decoded cursor

        Raises:
            InvalidCursorError: If the token is malformed or was issued for a
                different sort field or order
        """
        padded = token + "=" * (-len(token) % 4)
        try:
            raw = base64.urlsafe_b64decode(padded.encode("ascii"))
            cursor = cls.model_validate_json(raw)
        except (binascii.Error, UnicodeEncodeError, PydanticValidationError) as e:
            raise InvalidCursorError("Malformed cursor") from e

        if cursor.sort_by != sort_by or cursor.order != order:
            raise InvalidCursorError(
                f"Cursor was issued for {cursor.sort_by.value}/{cursor.order.value}, "
                f"not {sort_by.value}/{order.value}"
            )
        if not _key_matches(sort_by, cursor.key):
            raise InvalidCursorError("Cursor key does not match its sort field")
        return cursor


def _key_matches(sort_by: DealSortField, key: SortKey) -> bool:
    if sort_by == DealSortField.CREATED_AT:
        return isinstance(key, datetime)
    if sort_by == DealSortField.SCORE:
        return isinstance(key, int)
    return isinstance(key, (int, float)) and not isinstance(key, bool)
