"""Exceptions raised while decoding MS-SHLLINK data."""


class FormatError(Exception):
    """Raised when data does not conform to the MS-SHLLINK format."""


class InvalidHeaderError(FormatError):
    """Raised when the header size or class identifier is wrong."""


class OutOfBoundsError(FormatError):
    """Raised when a read would run past the end of the available data."""


class TruncatedIdListError(FormatError):
    """Raised when a LinkTargetIDList is inconsistent with its declared size."""


class TruncatedStringError(FormatError):
    """Raised when a StringData entry declares more characters than remain."""


class InvalidLinkInfoError(FormatError):
    """Raised when a LinkInfo offset points outside the LinkInfo block."""
