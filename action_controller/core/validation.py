import logging
import re
from typing import Any


logger = logging.getLogger(__name__)

MIN_STATUS_CODE = 100
MAX_STATUS_CODE = 599

FORMAT_NAME_PATTERN = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*$')
MIME_TYPE_PATTERN = re.compile(r'^(\*|[a-zA-Z0-9][\w.+-]*)/(\*|[a-zA-Z0-9][\w.+-]*)$')


def validate_exception(kind: Any) -> None:
    if not (isinstance(kind, type) and issubclass(kind, BaseException)):
        raise TypeError(f"Expected an exception class, got {kind!r}")


def validate_status_code(code: Any) -> None:
    if isinstance(code, bool) or not isinstance(code, int):
        raise TypeError(f"Status code must be an int, got {code!r}")

    if not MIN_STATUS_CODE <= code <= MAX_STATUS_CODE:
        raise ValueError(f"Invalid status code {code}. Allowed: {MIN_STATUS_CODE}-{MAX_STATUS_CODE}")


def validate_format(name: Any) -> None:
    if not isinstance(name, str) or not FORMAT_NAME_PATTERN.match(name):
        raise ValueError(f"Invalid format name: {name!r}")


def validate_mime_type(mime_type: Any) -> None:
    if not isinstance(mime_type, str) or not MIME_TYPE_PATTERN.match(mime_type):
        raise ValueError(f"Invalid MIME type: {mime_type!r}")
