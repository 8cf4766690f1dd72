"""HTTP icon source implementing the ``IconSource`` port."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from html.parser import HTMLParser
from pathlib import PurePosixPath
from urllib.parse import urljoin, urlparse

import httpx

from webapp_bundler.errors import IconSourceError
from webapp_bundler.icons.model import Icon
from webapp_bundler.schemas import HttpIconSourceOptions

logger = logging.getLogger(__name__)

MIME_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/x-icon": "ico",
    "image/vnd.microsoft.icon": "ico",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
}
EXTENSION_MIMES = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "ico": "image/x-icon",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
}


class _IconLinkParser(HTMLParser):
    """Collect ``href`` values of icon ``<link>`` elements."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.hrefs: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag != "link":
            return
        values = {name: value or "" for name, value in attrs}
        href = values.get("href", "").strip()
        rels = values.get("rel", "").lower().split()
        if href and any(rel == "icon" or rel.startswith("apple-touch-icon") for rel in rels):
            self.hrefs.append(href)


def discover_icon_urls(html: str, page_url: str) -> list[str]:
    """Return absolute icon URLs declared in ``html`` plus ``/favicon.ico``.

    Order follows the document; duplicates are dropped.
    """
    parser = _IconLinkParser()
    parser.feed(html)
    parser.close()
    urls = [urljoin(page_url, href) for href in parser.hrefs]
    urls.append(urljoin(page_url, "/favicon.ico"))
    return list(dict.fromkeys(urls))


def guess_extension(url: str, content_type: str | None) -> str:
    """Guess the icon extension from ``Content-Type`` or the URL path."""
    mime = (content_type or "").split(";", 1)[0].strip().lower()
    if mime in MIME_EXTENSIONS:
        return MIME_EXTENSIONS[mime]
    suffix = PurePosixPath(urlparse(url).path).suffix.lower().lstrip(".")
    return "jpg" if suffix == "jpeg" else suffix


class HttpIconSource:
    """Infer a site's icon by scanning its page for icon links.

    Parameters
    ----------
    client : httpx.Client | None, optional
        Client to reuse; a short-lived client is created per call when omitted.
    options : HttpIconSourceOptions | None, optional
        Timeouts and download limits.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        options: HttpIconSourceOptions | None = None,
    ) -> None:
        self._client = client
        self._options = options or HttpIconSourceOptions()

    def infer(self, url: str, preferred_formats: Sequence[str]) -> Icon | None:
        """Return the best candidate icon for ``url`` or ``None``.

        Candidates are ranked by position in ``preferred_formats``, then by
        byte size (largest first).

        Raises
        ------
        IconSourceError
            If the page cannot be fetched and ``/favicon.ico`` yields nothing.
        """
        prefs = [fmt.lower().lstrip(".") for fmt in preferred_formats]
        if self._client is not None:
            return self._infer(self._client, url, prefs)
        with httpx.Client(
            timeout=self._options.timeout,
            follow_redirects=True,
            headers={"User-Agent": self._options.user_agent},
        ) as client:
            return self._infer(client, url, prefs)

    def _infer(self, client: httpx.Client, url: str, prefs: list[str]) -> Icon | None:
        try:
            response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            fallback = self._select(client, [urljoin(url, "/favicon.ico")], prefs)
            if fallback is None:
                raise IconSourceError(f"Unable to fetch page {url}: {exc}") from exc
            logger.debug("page %s unavailable, using %s", url, fallback.source)
            return fallback

        candidates = discover_icon_urls(response.text, str(response.url))
        return self._select(client, candidates, prefs)

    def _select(
        self, client: httpx.Client, candidates: list[str], prefs: list[str]
    ) -> Icon | None:
        icons: list[Icon] = []
        for icon_url in candidates[: self._options.max_candidates]:
            icon = self._download(client, icon_url)
            if icon is None:
                continue
            if icon.ext not in prefs:
                logger.debug("skipping %s: format %r not preferred", icon_url, icon.ext)
                continue
            icons.append(icon)
        if not icons:
            return None
        return min(icons, key=lambda icon: (prefs.index(icon.ext), -icon.size))

    def _download(self, client: httpx.Client, url: str) -> Icon | None:
        try:
            response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.debug("icon candidate %s unavailable: %s", url, exc)
            return None
        data = response.content
        if not data or len(data) > self._options.max_icon_bytes:
            logger.debug("icon candidate %s has unusable size %d", url, len(data))
            return None
        ext = guess_extension(url, response.headers.get("content-type"))
        mime = EXTENSION_MIMES.get(ext, "application/octet-stream")
        return Icon.from_bytes(source=url, data=data, mime=mime, ext=ext)
