"""StringData decoding (MS-SHLLINK 2.4)."""

import logging
from dataclasses import dataclass

from ._constants import STRING_FIELDS, LinkFlags
from .cursor import ByteCursor
from .errors import OutOfBoundsError, TruncatedStringError

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StringData:
    """The optional counted strings.  ``None`` means the flag was clear."""

    name: str | None = None
    relative_path: str | None = None
    working_dir: str | None = None
    arguments: str | None = None
    icon_location: str | None = None


def decode_counted_string(cursor: ByteCursor, unicode: bool) -> str:
    """Read a u16 character count followed by that many characters.

    Raises:
        OutOfBoundsError: the count itself cannot be read.
        TruncatedStringError: fewer bytes remain than the count declares.
    """
    offset = cursor.absolute()
    count = cursor.read_u16()
    width = 2 if unicode else 1
    try:
        return cursor.read_fixed_string(count, width)
    except OutOfBoundsError:
        raise TruncatedStringError(
            f"String at 0x{offset:X} declares {count} characters "
            f"({count * width} bytes), only {cursor.remaining} remain"
        ) from None


def decode_string_data(
    cursor: ByteCursor, link_flags: LinkFlags, partial: dict | None = None
) -> StringData:
    """Decode every StringData field enabled in *link_flags*, in file order.

    If *partial* is given it is filled with the fields decoded so far, so a
    caller that catches :class:`TruncatedStringError` can keep them.

    Raises:
        OutOfBoundsError: a count prefix cannot be read.
        TruncatedStringError: a string overruns the data.
    """
    unicode = bool(link_flags & LinkFlags.IS_UNICODE)
    fields = {} if partial is None else partial
    for flag, attr in STRING_FIELDS:
        if link_flags & flag:
            fields[attr] = decode_counted_string(cursor, unicode)
    return StringData(**fields)
