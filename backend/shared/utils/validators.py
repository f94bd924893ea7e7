"""
Shared validators for input sanitization.

Usage:
    from shared.utils.validators import validate_image_url, parse_limit

    logo_url = validate_image_url(body.logo_url)
    limit = parse_limit(request.query_params.get("limit"))
"""

import re
from typing import Optional
from urllib.parse import urlparse

from shared.config.constants import Limits, SLUG_PATTERN

# Internal hosts that must never appear in stored image URLs (SSRF prevention)
BLOCKED_HOSTS = [
    "localhost",
    "127.0.0.1",
    "0.0.0.0",
    "10.",
    "192.168.",
    "169.254.",  # Link-local and cloud metadata
    "[::1]",
    "metadata.google",
]
BLOCKED_HOSTS.extend(f"172.{octet}." for octet in range(16, 32))

# Blocked URL schemes
BLOCKED_SCHEMES = {"javascript", "data", "file", "ftp", "mailto", "tel"}

_SLUG_RE = re.compile(SLUG_PATTERN)


def validate_image_url(url: Optional[str]) -> Optional[str]:
    """
    Validate and sanitize an image URL (logo, banner, product image, avatar).

    Args:
        url: The URL to validate (can be None)

    Returns:
        The validated URL, or None for empty input

    Raises:
        ValueError: If the URL is invalid or points at an internal host
    """
    if url is None:
        return None

    url = url.strip()
    if not url:
        return None

    if len(url) > Limits.MAX_URL_LENGTH:
        raise ValueError(f"URL too long (max {Limits.MAX_URL_LENGTH} characters)")

    parsed = urlparse(url)

    scheme = parsed.scheme.lower()
    if scheme in BLOCKED_SCHEMES:
        raise ValueError(f"URL scheme not allowed: {scheme}")
    if scheme not in ("http", "https"):
        raise ValueError("Only HTTP/HTTPS URLs are allowed")

    host = (parsed.hostname or "").lower()
    if not host:
        raise ValueError("URL has no valid host")

    for blocked in BLOCKED_HOSTS:
        # IP prefixes end with "." and match from the start; names match anywhere
        matched = host.startswith(blocked) if blocked.endswith(".") else blocked.strip("[]") in host
        if matched:
            raise ValueError("Internal URLs are not allowed")

    return url


def validate_slug(slug: str) -> str:
    """
    Normalize and validate a restaurant slug ("pizza-place").

    Raises:
        ValueError: If the slug has characters other than lowercase letters, digits and hyphens
    """
    slug = slug.strip().lower()
    if len(slug) > Limits.MAX_SLUG_LENGTH:
        raise ValueError(f"Slug too long (max {Limits.MAX_SLUG_LENGTH} characters)")
    if not _SLUG_RE.match(slug):
        raise ValueError("Slug may only contain lowercase letters, digits and single hyphens")
    return slug


def parse_limit(raw: object, default: int = Limits.DEFAULT_TOP_PRODUCTS) -> int:
    """
    Parse a ranking limit from a query string value.

    Positive integers are accepted, capped at the largest BIGINT. Absent,
    non-numeric, zero or negative values fall back to the default.
    """
    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        return min(raw, Limits.MAX_DB_INTEGER) if raw > 0 else default

    text = str(raw).strip()
    if not re.fullmatch(r"\d+", text):
        return default

    # Longer than any BIGINT; int() also refuses very long digit strings
    digits = text.lstrip("0") or "0"
    if len(digits) > len(str(Limits.MAX_DB_INTEGER)):
        return Limits.MAX_DB_INTEGER

    value = int(digits)
    if value <= 0:
        return default
    return min(value, Limits.MAX_DB_INTEGER)


def sanitize_text(value: Optional[str], max_length: int = Limits.MAX_DESCRIPTION_LENGTH) -> Optional[str]:
    """
    Trim whitespace, drop control characters and cap length.

    Returns None for None input.
    """
    if value is None:
        return None

    value = re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", "", value).strip()
    if len(value) > max_length:
        value = value[:max_length].rstrip()
    return value
