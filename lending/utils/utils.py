"""
Utility helpers
---------------

Role:
- Identifier generation and input checks shared by the lending use cases.

Functions:
- new_id(): random string identifier for new documents.
- clean_text(value): strip a string, mapping blank strings to None.
- is_http_url(value): True for well-formed http(s) URLs.
"""
import uuid
from typing import Optional

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError as PydanticValidationError

_http_url_adapter = TypeAdapter(AnyHttpUrl)


def new_id() -> str:
    """Return a new random identifier."""
    return str(uuid.uuid4())


def clean_text(value: Optional[str]) -> Optional[str]:
    """Strip surrounding whitespace; blank strings become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def is_http_url(value: Optional[str]) -> bool:
    """Check that value is a well-formed http or https URL."""
    if not value or not value.strip():
        return False
    try:
        _http_url_adapter.validate_python(value.strip())
    except PydanticValidationError:
        return False
    return True
