"""Expand a pasted link into the log text it points at."""

from __future__ import annotations

import logging
import re
from typing import Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15

_url_re = re.compile(r"^https?://\S+$", re.IGNORECASE)
_pastebin_page_re = re.compile(r"^(https?://(?:www\.)?pastebin\.com)/(?!raw/)([A-Za-z0-9]+)", re.IGNORECASE)


def raw_url(url: str) -> str:
    """Rewrite a pastebin page link to its plain-text ``/raw/`` form."""

    m = _pastebin_page_re.match(url)
    if not m:
        return url
    return f"{m.group(1)}/raw/{m.group(2)}"


def expand_paste(text: str, *, timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None) -> str:
    """Return the body behind ``text`` if it is a link, else ``text`` unchanged.

    Any request failure falls back to the original text.
    """

    stripped = (text or "").strip()
    if not _url_re.match(stripped):
        return text
    url = raw_url(stripped)
    getter = session.get if session is not None else requests.get
    try:
        response = getter(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout:
        logger.warning("Timed out fetching %s, keeping pasted text", url)
        return text
    except requests.exceptions.HTTPError as exc:
        logger.warning("Fetching %s failed with %s, keeping pasted text", url, exc)
        return text
    except requests.exceptions.RequestException as exc:
        logger.warning("Could not fetch %s (%s), keeping pasted text", url, exc)
        return text
    logger.info("Expanded %s into %d character(s)", url, len(response.text))
    return response.text
