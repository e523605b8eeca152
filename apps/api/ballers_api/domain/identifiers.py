"""Entity identifier shape rules."""

import re
from uuid import uuid4

_IDENTIFIER_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def is_valid_identifier(value: object) -> bool:
    """Lexical check only: 24 hexadecimal characters, as issued by the document store."""
    return isinstance(value, str) and _IDENTIFIER_PATTERN.fullmatch(value) is not None


def new_identifier() -> str:
    return uuid4().hex[:24]
