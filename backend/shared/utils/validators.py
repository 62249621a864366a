"""
Shared validators for input sanitization and security.
"""

import ipaddress
import re
from urllib.parse import urlparse
from typing import Optional

from shared.config.constants import Limits

# Internal hostnames that must never appear in image URLs (SSRF prevention).
# Matched exactly or as a dot-suffix; IP literals are classified instead.
BLOCKED_HOSTNAMES = (
    "localhost",
    "metadata.google.internal",
)

BLOCKED_SCHEMES = {"javascript", "data", "file", "ftp", "mailto", "tel"}

# Object-storage keys such as "images/krapow-pork.jpg"
_STORAGE_KEY_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._/-]*$")


def is_internal_host(hostname: str) -> bool:
    """True for private, loopback, link-local or reserved IPs and internal names."""
    hostname = hostname.lower().rstrip(".")
    try:
        ip = ipaddress.ip_address(hostname)
    except ValueError:
        return any(
            hostname == blocked or hostname.endswith("." + blocked)
            for blocked in BLOCKED_HOSTNAMES
        )
    return (
        ip.is_private
        or ip.is_loopback
        or ip.is_link_local
        or ip.is_reserved
        or ip.is_unspecified
        or ip.is_multicast
    )


def validate_image_reference(value: Optional[str]) -> Optional[str]:
    """
    Validate an image reference: either an object-storage key or an HTTP(S) URL.

    Args:
        value: The reference to validate (can be None)

    Returns:
        The stripped reference, or None for empty input

    Raises:
        ValueError: If the reference is malformed or points at an internal host
    """
    if value is None:
        return None

    value = value.strip()
    if not value:
        return None

    if len(value) > Limits.IMAGE_URL_MAX_LENGTH:
        raise ValueError(
            f"Image reference too long (max {Limits.IMAGE_URL_MAX_LENGTH} characters)"
        )

    if "://" not in value and ":" not in value.split("/", 1)[0]:
        if ".." in value or not _STORAGE_KEY_RE.match(value):
            raise ValueError("Invalid image key")
        return value

    parsed = urlparse(value)
    scheme = parsed.scheme.lower()
    if scheme in BLOCKED_SCHEMES:
        raise ValueError(f"URL scheme not allowed: {scheme}")
    if scheme not in ("http", "https"):
        raise ValueError("Only HTTP/HTTPS image URLs are allowed")

    # hostname drops userinfo, port and IPv6 brackets
    host = parsed.hostname
    if not host:
        raise ValueError("Image URL has no host")

    if is_internal_host(host):
        raise ValueError("Internal image URL not allowed")

    return value


def normalize_name(value: Optional[str]) -> Optional[str]:
    """Strip surrounding whitespace; blank names become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None
