"""
Supabase SSR session cookie parsing.

The Supabase SSR client stores the session as JSON under
``sb-<project-ref>-auth-token``. Large values are split into numbered
chunks (``<name>.0``, ``<name>.1``, ...) and newer clients prefix the
value with ``base64-`` and encode it as base64url.
"""

import base64
import binascii
import json
import re
from typing import Mapping, Optional
from urllib.parse import unquote, urlparse

BASE64_PREFIX = "base64-"

_COOKIE_NAME_PATTERN = re.compile(r"^sb-[^.]+-auth-token$")
_CHUNK_PATTERN = re.compile(r"^(sb-[^.]+-auth-token)\.\d+$")


def default_cookie_name(supabase_url: str) -> Optional[str]:
    """Derive the session cookie name from the Supabase project URL."""
    if not supabase_url:
        return None
    host = urlparse(supabase_url).hostname
    if not host:
        return None
    project_ref = host.split(".")[0]
    return f"sb-{project_ref}-auth-token"


def _discover_cookie_name(cookies: Mapping[str, str]) -> Optional[str]:
    for name in cookies:
        if _COOKIE_NAME_PATTERN.match(name):
            return name
        match = _CHUNK_PATTERN.match(name)
        if match:
            return match.group(1)
    return None


def _join_chunks(cookies: Mapping[str, str], name: str) -> Optional[str]:
    if name in cookies:
        return cookies[name]

    chunks = []
    index = 0
    while f"{name}.{index}" in cookies:
        chunks.append(cookies[f"{name}.{index}"])
        index += 1
    return "".join(chunks) or None


def parse_session_cookie(raw: str) -> Optional[str]:
    """
    Extract the access token from a session cookie value.

    Args:
        raw: Cookie value, possibly URL-encoded and base64 prefixed

    Returns:
        The access token, or None if the value is not a session
    """
    value = unquote(raw)

    if value.startswith(BASE64_PREFIX):
        encoded = value[len(BASE64_PREFIX):]
        padding = "=" * (-len(encoded) % 4)
        try:
            value = base64.urlsafe_b64decode(encoded + padding).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            return None

    try:
        data = json.loads(value)
    except ValueError:
        return None

    # Older auth-helpers stored [access_token, refresh_token, ...]
    if isinstance(data, list):
        token = data[0] if data else None
    elif isinstance(data, dict):
        token = data.get("access_token")
    else:
        token = None

    return token if isinstance(token, str) and token else None


def read_session_cookie(
    cookies: Mapping[str, str],
    cookie_name: Optional[str] = None,
) -> Optional[str]:
    """
    Read the Supabase access token from request cookies.

    Args:
        cookies: Request cookies
        cookie_name: Session cookie name; discovered from the cookies
            when not given

    Returns:
        The access token, or None if no session cookie is present
    """
    name = cookie_name or _discover_cookie_name(cookies)
    if name is None:
        return None

    raw = _join_chunks(cookies, name)
    if raw is None:
        return None
    return parse_session_cookie(raw)
