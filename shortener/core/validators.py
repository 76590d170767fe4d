"""
Input Validators

URL checks applied before a link is stored. A valid target is an absolute
web URI: http or https scheme, a host, and a sane length.
"""

from urllib.parse import urlparse

MAX_URL_LENGTH = 2048
ALLOWED_SCHEMES = {"http", "https"}


def validate_url_length(url: str, max_length: int = MAX_URL_LENGTH) -> bool:
    """
    Validate URL length to prevent DoS attacks.

    Args:
        url: The URL to validate
        max_length: Maximum allowed length (default: 2048 per RFC 7230)

    Returns:
        True if URL length is valid, False otherwise
    """
    return bool(url) and len(url) <= max_length


def is_valid_url(url: str) -> bool:
    """
    Check that url is a well-formed absolute web URI.

    Rejects anything without an http/https scheme or without a host, which
    also keeps javascript:, data: and file: targets out of the store.

    Args:
        url: The URL string to validate

    Returns:
        True if valid, False otherwise
    """
    if not url or not isinstance(url, str):
        return False

    if not validate_url_length(url):
        return False

    if any(ch.isspace() for ch in url):
        return False

    try:
        result = urlparse(url)
        # Accessing .port raises on a malformed port such as "host:abc"
        result.port
    except ValueError:
        return False

    if result.scheme.lower() not in ALLOWED_SCHEMES:
        return False

    if not result.hostname:
        return False

    return True
