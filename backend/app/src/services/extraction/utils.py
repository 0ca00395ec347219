"""Utilities shared by the extraction pipeline and the watchlist client."""

from __future__ import annotations

import html
import re
from typing import Callable, Iterable, Optional
from urllib.parse import urlsplit, urlunsplit

from configs import settings


DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,"
        "image/webp,image/apng,*/*;q=0.8"
    ),
    "Accept-Language": "tr-TR,tr;q=0.9,en-US;q=0.8,en;q=0.7",
    "Accept-Encoding": "gzip, deflate, br",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}

Matcher = Callable[[str], Optional[str]]


def _split(url: str):
    candidate = url.strip()
    if "://" not in candidate:
        candidate = f"https://{candidate}"
    return urlsplit(candidate)


def is_target_url(url: str | None, domain: str | None = None) -> bool:
    """Return True when the URL's host is the marketplace domain or a subdomain."""
    if not url or not url.strip():
        return False

    domain = (domain or settings.TARGET_DOMAIN).lower()
    try:
        host = (_split(url).hostname or "").lower()
    except ValueError:
        return False
    return host == domain or host.endswith(f".{domain}")


def canonical_url(url: str) -> str:
    """Drop query string and fragment; they never identify a product."""
    parts = _split(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def normalize_whitespace(value: str) -> str:
    """Collapse repeated spaces and newlines."""
    return re.sub(r"\s+", " ", value).strip()


def clean_text(value: str) -> str:
    """Unescape HTML entities and collapse whitespace."""
    return normalize_whitespace(html.unescape(value))


def with_currency(amount: str, suffix: str | None = None) -> str:
    return f"{amount} {suffix or settings.CURRENCY_SUFFIX}"


def first_match(matchers: Iterable[Matcher], document: str) -> Optional[str]:
    """Run matchers in order and return the first non-empty capture."""
    for matcher in matchers:
        value = matcher(document)
        if value:
            return value
    return None
