"""Resource pre-fetch phase.

Every image the page references is fetched concurrently and the whole batch
is awaited before the tree walk starts, so the walk only ever reads a frozen
:class:`ResourceSnapshot`.  A failed resource is recorded, never raised.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from typing import Iterable
from urllib.parse import unquote_to_bytes, urljoin, urlparse

import httpx
from bs4 import BeautifulSoup

from h2d.cascade.resolver import inline_style
from h2d.config import ConversionConfig
from h2d.errors import ResourceFetchError
from h2d.layout.appearance import background_image_url
from h2d.model.resources import ImageResource, ResourceSnapshot

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MIME = "image/png"
_FETCHABLE_SCHEMES = frozenset({"http", "https"})


def collect_image_urls(markup: str) -> list[str]:
    """Image URLs referenced by *markup*, deduplicated in document order.

    Covers ``<img src>`` and ``background-image: url(...)`` in inline styles.
    """
    soup = BeautifulSoup(markup, "html.parser")
    urls: list[str] = []
    for tag in soup.find_all(True):
        if tag.name == "img":
            src = tag.get("src")
            if isinstance(src, str) and src.strip():
                urls.append(src.strip())
        url = background_image_url(inline_style(tag))
        if url:
            urls.append(url)
    return list(dict.fromkeys(urls))


def decode_data_url(url: str) -> ImageResource:
    """Decode a ``data:`` URL locally; raises :class:`ResourceFetchError` if malformed."""
    header, sep, payload = url.partition(",")
    if not sep or not header.startswith("data:"):
        raise ResourceFetchError("malformed data URL", url=url)
    params = header[len("data:"):].split(";")
    mime_type = params[0] or DEFAULT_IMAGE_MIME
    if "base64" in params[1:]:
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ResourceFetchError("invalid base64 in data URL", url=url, cause=exc) from exc
    else:
        data = unquote_to_bytes(payload)
    return ImageResource(url=url, data=data, mime_type=mime_type)


def resolve_url(url: str, base_url: str = "") -> str:
    """Return the absolute http(s) URL for *url*, or raise :class:`ResourceFetchError`."""
    try:
        absolute = urljoin(base_url, url) if base_url else url
        scheme = urlparse(absolute).scheme
    except ValueError as exc:
        raise ResourceFetchError(f"malformed URL {url!r}", url=url, cause=exc) from exc
    if scheme not in _FETCHABLE_SCHEMES:
        raise ResourceFetchError(f"cannot resolve {url!r} to an http(s) URL", url=url)
    return absolute


async def fetch_image(client: httpx.AsyncClient, url: str, base_url: str = "") -> ImageResource:
    """Fetch a single image.

    Raises :class:`ResourceFetchError` on a malformed URL, timeout, transport
    failure or a non-2xx status.
    """
    if url.startswith("data:"):
        return decode_data_url(url)
    absolute = resolve_url(url, base_url)
    try:
        resp = await client.get(absolute)
    except httpx.TimeoutException as exc:
        raise ResourceFetchError(f"timed out fetching {absolute}", url=url, cause=exc) from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise ResourceFetchError(f"failed fetching {absolute}: {exc}", url=url, cause=exc) from exc
    if resp.status_code >= 300:
        raise ResourceFetchError(f"HTTP {resp.status_code} fetching {absolute}", url=url)
    mime_type = resp.headers.get("content-type", DEFAULT_IMAGE_MIME).split(";")[0].strip()
    return ImageResource(url=url, data=resp.content, mime_type=mime_type or DEFAULT_IMAGE_MIME)


async def prefetch_images(
    urls: Iterable[str],
    *,
    base_url: str = "",
    config: ConversionConfig | None = None,
    client: httpx.AsyncClient | None = None,
) -> ResourceSnapshot:
    """Fetch every URL concurrently and return once all have settled.

    Images are keyed by the URL as written in the page.  A caller-supplied
    *client* is left open.
    """
    config = config or ConversionConfig()
    unique = list(dict.fromkeys(urls))
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(
            timeout=config.fetch_timeout,
            headers={"User-Agent": config.user_agent},
            follow_redirects=True,
        )
    try:
        results = await asyncio.gather(
            *(fetch_image(client, url, base_url) for url in unique),
            return_exceptions=True,
        )
    finally:
        if owns_client:
            await client.aclose()

    images: dict[str, ImageResource] = {}
    failed: set[str] = set()
    for url, result in zip(unique, results):
        if isinstance(result, ResourceFetchError):
            logger.warning("Image %s unavailable: %s", url, result)
            failed.add(url)
        elif isinstance(result, Exception):
            logger.warning("Image %s unavailable: unexpected %s: %s", url, type(result).__name__, result)
            failed.add(url)
        elif isinstance(result, BaseException):
            raise result
        else:
            images[url] = result
    logger.info("Pre-fetched %d images (%d failed)", len(images), len(failed))
    return ResourceSnapshot(images=images, failed=frozenset(failed))
