from __future__ import annotations

import logging

import requests

from src.link_checker.domain.models.link_status import LinkStatus

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SEC = 15.0
_SCHEMES = ("http://", "https://")


def normalize_link(link: str) -> str:
    """Prefix bare hosts with https://."""
    if link.startswith(_SCHEMES):
        return link
    return f"https://{link}"


def check_link(
    link: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SEC,
    session: requests.Session | None = None,
) -> LinkStatus:
    """
    Probe ``link`` with a HEAD request.

    Any 2xx/3xx answer means available. Errors, timeouts and every other status
    code mean not available; nothing is raised.
    """
    url = normalize_link(link)
    client = session or requests
    try:
        response = client.head(url, timeout=timeout, allow_redirects=True)
    except (requests.RequestException, ValueError) as exc:
        logger.debug("Link probe failed", extra={"link": url, "error": str(exc)})
        return LinkStatus.NOT_AVAILABLE

    try:
        if 200 <= response.status_code < 400:
            return LinkStatus.AVAILABLE
        return LinkStatus.NOT_AVAILABLE
    finally:
        response.close()
