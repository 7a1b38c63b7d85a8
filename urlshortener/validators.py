"""Field checks for save requests.

Each check returns a list of human-readable messages; an empty list means the
input is valid.
"""

import re
from urllib.parse import urlparse

MAX_URL_LENGTH = 2048
ALIAS_PATTERN = re.compile(r"[A-Za-z0-9_-]{1,64}")

# paths served by the app itself; a mapping under one of these could never be reached
RESERVED_ALIASES = frozenset({"health", "docs", "redoc", "url"})


def validate_url(url: str | None) -> list[str]:
    if not url:
        return ["field url is a required field"]
    if len(url) > MAX_URL_LENGTH:
        return [f"field url must be at most {MAX_URL_LENGTH} characters"]

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return ["field url is not a valid URL"]
    return []


def validate_alias(alias: str | None) -> list[str]:
    # a missing alias is fine, one gets generated
    if not alias:
        return []
    if not ALIAS_PATTERN.fullmatch(alias):
        return ["field alias may only contain letters, digits, '-' and '_' (max 64 characters)"]
    if alias.lower() in RESERVED_ALIASES:
        return [f"field alias '{alias}' is reserved"]
    return []


def validate_save_request(url: str | None, alias: str | None) -> list[str]:
    return validate_url(url) + validate_alias(alias)
