from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning


DEFAULT_HEADERS = {
    "User-Agent": "LinkSaverBot/1.0",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}


@dataclass
class PageMetadata:
    title: str | None
    favicon: str | None


@dataclass
class Enrichment:
    title: str
    favicon: str
    summary: str
    errors: list[str] = field(default_factory=list)


def _normalize_error(exc: Exception) -> str:
    message = str(exc).strip()
    if message:
        return message
    return exc.__class__.__name__


def default_favicon(url: str) -> str:
    try:
        return urljoin(url, "/favicon.ico")
    except ValueError:
        return "/favicon.ico"


def fetch_html(url: str, timeout: float, max_bytes: int) -> tuple[str, str]:
    with httpx.Client(
        follow_redirects=True, timeout=timeout, headers=DEFAULT_HEADERS
    ) as client:
        with client.stream("GET", url) as response:
            response.raise_for_status()
            body = bytearray()
            for chunk in response.iter_bytes():
                body.extend(chunk[: max_bytes - len(body)])
                if len(body) >= max_bytes:
                    break
            encoding = response.encoding or "utf-8"
            return bytes(body).decode(encoding, errors="ignore"), str(response.url)


def _build_soup(html: str) -> BeautifulSoup:
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)
        return BeautifulSoup(html, "lxml")


def _has_icon_rel(rel) -> bool:
    if not rel:
        return False
    if isinstance(rel, str):
        rel = rel.split()
    return any(token.lower() == "icon" for token in rel)


def extract_metadata(html: str, page_url: str) -> PageMetadata:
    soup = _build_soup(html)

    title = None
    title_tag = soup.find("title")
    if title_tag is not None:
        text = title_tag.get_text().strip()
        if text:
            title = text

    favicon = None
    for link in soup.find_all("link", href=True):
        if _has_icon_rel(link.get("rel")):
            href = link["href"].strip()
            if href:
                favicon = urljoin(page_url, href)
                break

    return PageMetadata(title=title, favicon=favicon)


def fetch_summary(url: str, endpoint: str, timeout: float) -> str:
    with httpx.Client(
        timeout=timeout, headers={"User-Agent": DEFAULT_HEADERS["User-Agent"]}
    ) as client:
        response = client.post(endpoint, json={"url": url})
        response.raise_for_status()
        return response.text


def enrich_url(
    url: str,
    timeout: float,
    max_bytes: int,
    summary_endpoint: str,
    summary_timeout: float,
) -> Enrichment:
    """Look up title, favicon and summary for ``url`` without ever raising.

    Anything that goes wrong is recorded in ``errors`` and the matching field
    keeps its default: the url itself for the title, ``<origin>/favicon.ico``
    for the favicon, and an empty summary. The summarizer is skipped when the
    page itself could not be fetched.
    """
    result = Enrichment(title=url, favicon=default_favicon(url), summary="")

    try:
        html, final_url = fetch_html(url, timeout=timeout, max_bytes=max_bytes)
        metadata = extract_metadata(html, final_url)
    except Exception as exc:
        result.errors.append(f"page: {_normalize_error(exc)}")
        return result

    if metadata.title:
        result.title = metadata.title
    if metadata.favicon:
        result.favicon = metadata.favicon

    try:
        result.summary = fetch_summary(
            url, endpoint=summary_endpoint, timeout=summary_timeout
        )
    except Exception as exc:
        result.errors.append(f"summary: {_normalize_error(exc)}")

    return result
