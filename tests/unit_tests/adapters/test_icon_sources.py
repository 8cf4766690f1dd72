"""Unit tests for the HTTP icon source."""

from __future__ import annotations

import httpx
import pytest

from webapp_bundler.adapters.icon_sources import (
    HttpIconSource,
    discover_icon_urls,
    guess_extension,
)
from webapp_bundler.errors import IconSourceError
from webapp_bundler.schemas import HttpIconSourceOptions
from tests.unit_tests.helpers import make_png

PAGE = """
<html><head>
  <link rel="stylesheet" href="/style.css">
  <link rel="shortcut icon" href="/static/small.ico">
  <link rel="apple-touch-icon" href="https://cdn.example.com/touch.png">
  <link rel="icon" type="image/png" href="icons/large.png">
</head><body></body></html>
"""

SMALL_PNG = make_png(16, 16)
LARGE_PNG = make_png(192, 192)
TOUCH_PNG = make_png(180, 180, (0, 0, 255, 255))


def _client(routes: dict[str, httpx.Response]) -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        return routes.get(str(request.url), httpx.Response(404))

    return httpx.Client(transport=httpx.MockTransport(handler))


def _png(data: bytes) -> httpx.Response:
    return httpx.Response(200, content=data, headers={"content-type": "image/png"})


def test_discover_icon_urls_resolves_and_appends_favicon() -> None:
    """Resolve relative hrefs and always add the conventional favicon."""
    urls = discover_icon_urls(PAGE, "https://example.com/app/")
    assert urls == [
        "https://example.com/static/small.ico",
        "https://cdn.example.com/touch.png",
        "https://example.com/app/icons/large.png",
        "https://example.com/favicon.ico",
    ]


def test_discover_icon_urls_drops_duplicates() -> None:
    """Keep the first occurrence of repeated icon URLs."""
    html = '<link rel="icon" href="/favicon.ico"><link rel="icon" href="/favicon.ico">'
    assert discover_icon_urls(html, "https://example.com") == ["https://example.com/favicon.ico"]


@pytest.mark.parametrize(
    ("url", "content_type", "expected"),
    [
        ("https://x/icon", "image/png; charset=binary", "png"),
        ("https://x/icon.jpeg", None, "jpg"),
        ("https://x/favicon.ico", "application/octet-stream", "ico"),
        ("https://x/icon", "image/vnd.microsoft.icon", "ico"),
        ("https://x/", None, ""),
    ],
)
def test_guess_extension(url: str, content_type: str | None, expected: str) -> None:
    """Prefer the content type and fall back to the URL suffix."""
    assert guess_extension(url, content_type) == expected


def test_infer_prefers_format_then_size() -> None:
    """Pick the largest icon of the most preferred format."""
    client = _client(
        {
            "https://example.com/": httpx.Response(200, text=PAGE),
            "https://example.com/static/small.ico": httpx.Response(200, content=b"ico-bytes"),
            "https://cdn.example.com/touch.png": _png(TOUCH_PNG),
            "https://example.com/icons/large.png": _png(LARGE_PNG),
            "https://example.com/favicon.ico": httpx.Response(200, content=b"ico"),
        }
    )
    icon = HttpIconSource(client=client).infer("https://example.com/", ["png", "jpg", "ico"])
    assert icon is not None
    assert icon.ext == "png"
    assert icon.mime == "image/png"
    expected = max((TOUCH_PNG, LARGE_PNG), key=len)
    assert icon.data == expected
    assert icon.size == len(expected)


def test_infer_falls_back_to_less_preferred_format() -> None:
    """Return an ico when no preferred png candidate downloads."""
    client = _client(
        {
            "https://example.com/": httpx.Response(200, text="<html></html>"),
            "https://example.com/favicon.ico": httpx.Response(200, content=b"ico-bytes"),
        }
    )
    icon = HttpIconSource(client=client).infer("https://example.com/", ["png", "ico"])
    assert icon is not None
    assert icon.source == "https://example.com/favicon.ico"
    assert icon.ext == "ico"


def test_infer_returns_none_without_candidates() -> None:
    """Return ``None`` when every candidate is missing or not preferred."""
    client = _client(
        {
            "https://example.com/": httpx.Response(200, text=PAGE),
            "https://example.com/static/small.ico": httpx.Response(200, content=b"ico"),
        }
    )
    assert HttpIconSource(client=client).infer("https://example.com/", ["png"]) is None


def test_infer_skips_oversized_candidates() -> None:
    """Ignore candidates above the download limit."""
    client = _client(
        {
            "https://example.com/": httpx.Response(200, text=PAGE),
            "https://cdn.example.com/touch.png": _png(TOUCH_PNG),
            "https://example.com/icons/large.png": _png(LARGE_PNG),
        }
    )
    options = HttpIconSourceOptions(max_icon_bytes=min(len(TOUCH_PNG), len(LARGE_PNG)))
    icon = HttpIconSource(client=client, options=options).infer("https://example.com/", ["png"])
    assert icon is not None
    assert icon.size <= options.max_icon_bytes


def test_infer_page_failure_raises() -> None:
    """Raise ``IconSourceError`` when the page itself is unavailable."""
    client = _client({"https://example.com/": httpx.Response(503)})
    with pytest.raises(IconSourceError, match="Unable to fetch page"):
        HttpIconSource(client=client).infer("https://example.com/", ["png"])


def test_infer_transport_error_raises() -> None:
    """Wrap transport errors from the page request."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    with pytest.raises(IconSourceError, match="connection refused"):
        HttpIconSource(client=client).infer("https://example.com/", ["png"])


def test_infer_page_failure_falls_back_to_favicon() -> None:
    """Use the conventional favicon when the page itself is unavailable."""
    client = _client(
        {
            "https://example.com/app": httpx.Response(404),
            "https://example.com/favicon.ico": httpx.Response(200, content=b"ico-bytes"),
        }
    )
    icon = HttpIconSource(client=client).infer("https://example.com/app", ["png", "ico"])
    assert icon is not None
    assert icon.source == "https://example.com/favicon.ico"
    assert icon.ext == "ico"


def test_infer_page_failure_with_unpreferred_favicon_raises() -> None:
    """Raise when the fallback favicon is not an accepted format."""
    client = _client(
        {
            "https://example.com/": httpx.Response(500),
            "https://example.com/favicon.ico": httpx.Response(200, content=b"ico-bytes"),
        }
    )
    with pytest.raises(IconSourceError, match="Unable to fetch page"):
        HttpIconSource(client=client).infer("https://example.com/", ["png"])
