"""
auth_client.py – Exchanges the login identity for a JWT bearer token.
"""

from __future__ import annotations

import logging

import requests

from errors import AuthenticationError, ParseError
from models import Credentials
from validator import parse_json

logger = logging.getLogger("story-spoiler")

LOGIN_PATH = "/User/Authentication"


def authenticate(
    credentials: Credentials,
    base_url: str,
    http: requests.Session | None = None,
) -> str:
    """POST the credentials and return the `accessToken` from the reply.

    *http* must not carry an Authorization header. When omitted, a
    throw-away session is created and closed here.
    """
    session = http or requests.Session()
    url = f"{base_url.rstrip('/')}{LOGIN_PATH}"
    body = {"userName": credentials.username, "password": credentials.password}

    logger.debug("POST %s as '%s'", url, credentials.username)
    try:
        resp = session.post(url, json=body)
    except requests.RequestException as exc:
        raise AuthenticationError(f"Login request failed: {exc}") from exc
    finally:
        if http is None:
            session.close()

    if resp.status_code != 200:
        raise AuthenticationError(
            f"Login returned {resp.status_code}, expected 200. Content: {resp.text[:300]}"
        )

    try:
        data = parse_json(resp.text)
    except ParseError as exc:
        raise AuthenticationError(f"Unusable login response: {exc}") from exc

    token = data.get("accessToken") if isinstance(data, dict) else None
    if not isinstance(token, str) or not token.strip():
        raise AuthenticationError(
            f"Failed to retrieve JWT token. Content: {resp.text[:300]}"
        )

    logger.info("Authenticated as '%s'", credentials.username)
    return token
