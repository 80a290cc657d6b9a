import html
import re
from typing import Optional

# Object keys: path segments of letters, digits, dot, dash and underscore
STORAGE_KEY_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*(/[A-Za-z0-9][A-Za-z0-9._-]*)*$")
MAX_STORAGE_KEY_LENGTH = 255


def sanitize_string(value: Optional[str]) -> Optional[str]:
    """
    Sanitize a string by escaping HTML special characters to prevent XSS.
    Returns None if input is None.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        return value
    return html.escape(str(value), quote=True)


def sanitize_storage_key(filename: str) -> str:
    """
    Validate a client-supplied object key for the image bucket.

    Leading slashes and surrounding whitespace are dropped and a missing
    .png extension is appended.

    Raises:
        ValueError: If the key is empty, too long, or contains unsafe segments
    """
    key = str(filename or "").strip().lstrip("/")
    if not key:
        raise ValueError("filename is required")

    if not key.lower().endswith(".png"):
        key = f"{key}.png"

    if len(key) > MAX_STORAGE_KEY_LENGTH:
        raise ValueError(f"filename exceeds maximum length of {MAX_STORAGE_KEY_LENGTH} characters")

    if ".." in key.split("/") or not STORAGE_KEY_PATTERN.match(key):
        raise ValueError("filename may only contain letters, numbers, '.', '-', '_' and '/'")

    return key
