"""Shared type aliases for lnkdecode modules."""

import os

BytesLike = bytes | bytearray | memoryview
LnkSource = BytesLike | str | os.PathLike
