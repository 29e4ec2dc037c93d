from __future__ import annotations

import re
import threading
import time
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional
from urllib.parse import urlparse

import requests

from ..utils.logging import get_logger

logger = get_logger("postcheck.content.links")

_inline_link_re = re.compile(r"\[[^\]]*?\]\((https?://[^)\s]+)(?:\s+\"[^\"]*\")?\)")

_DEFAULT_HEADERS: Dict[str, str] = {
    "User-Agent": "postcheck/0.1 (+link check)",
}


def extract_links(markdown: str) -> List[str]:
    """Return the http(s) targets of inline Markdown links, in document order."""
    return _inline_link_re.findall(markdown or "")


def is_valid_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def find_invalid_links(urls: Iterable[str]) -> List[str]:
    return [u for u in urls if not is_valid_url(u)]


def find_duplicate_links(urls: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    dupes: List[str] = []
    for url in urls:
        if url in seen and url not in dupes:
            dupes.append(url)
        seen.add(url)
    return dupes


@dataclass(slots=True, frozen=True)
class LinkStatus:
    url: str
    ok: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


class LinkChecker:
    """Check that link targets answer with a non-error HTTP status.

    Each URL is requested at most once per checker instance, also when worker
    threads ask for the same URL concurrently. ``HEAD`` is tried first;
    servers that reject it with 405 are retried with ``GET``. Without an
    injected session every thread gets its own ``requests.Session``.
    """

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        retries: int = 1,
        backoff: float = 1.5,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.retries = retries
        self.backoff = backoff
        self._shared_session = session
        if session is not None:
            session.headers.update(_DEFAULT_HEADERS)
        self._local = threading.local()
        self._lock = threading.Lock()
        self._cache: Dict[str, LinkStatus] = {}
        self._url_locks: Dict[str, threading.Lock] = {}

    @property
    def session(self) -> requests.Session:
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(_DEFAULT_HEADERS)
            self._local.session = session
        return session

    def _request(self, url: str) -> requests.Response:
        session = self.session
        resp = session.head(url, timeout=self.timeout, allow_redirects=True)
        if resp.status_code == 405:
            resp = session.get(url, timeout=self.timeout, allow_redirects=True, stream=True)
            resp.close()
        return resp

    def _check_once(self, url: str) -> LinkStatus:
        last_exc: requests.RequestException | None = None
        for attempt in range(self.retries + 1):
            try:
                resp = self._request(url)
            except requests.RequestException as exc:
                last_exc = exc
                if attempt >= self.retries:
                    break
                sleep_s = self.backoff ** attempt
                logger.debug("Link check failed (attempt %s/%s) for %s: %s; retrying in %.1fs", attempt + 1, self.retries + 1, url, exc, sleep_s)
                time.sleep(sleep_s)
                continue
            return LinkStatus(url=url, ok=resp.status_code < 400, status_code=resp.status_code)
        return LinkStatus(url=url, ok=False, error=str(last_exc))

    def check(self, url: str) -> LinkStatus:
        with self._lock:
            cached = self._cache.get(url)
            if cached is not None:
                return cached
            url_lock = self._url_locks.setdefault(url, threading.Lock())

        # Threads asking for the same URL wait for the first one's answer
        with url_lock:
            with self._lock:
                cached = self._cache.get(url)
            if cached is not None:
                return cached
            if not is_valid_url(url):
                status = LinkStatus(url=url, ok=False, error="invalid URL")
            else:
                logger.debug("Checking link %s", url)
                status = self._check_once(url)
            with self._lock:
                self._cache[url] = status
            return status

    def check_all(self, urls: Iterable[str]) -> List[LinkStatus]:
        return [self.check(u) for u in dict.fromkeys(urls)]
