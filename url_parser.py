# url_parser.py
"""
Job posting ingestion from a URL: fetch the page, keep the main article with
readability, then drop the boilerplate lines job boards wrap around it.
"""
import re
import logging
from urllib.parse import quote, urlparse

import requests
from bs4 import BeautifulSoup
from readability import Document
from readability.readability import Unparseable

from config import FETCH_TIMEOUT, get_fetch_proxy_url
from errors import UrlContentError

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)

HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept-Language": "en-US,en;q=0.9",
}

BOILERPLATE_PHRASES = [
    "share this job",
    "apply now",
    "report this job",
    "similar jobs",
    "privacy policy",
    "terms of service",
    "cookie settings",
    "all rights reserved",
    "back to top",
    "view all jobs",
    "powered by",
    "log in",
    "sign up",
]

BOILERPLATE_RE = re.compile(
    "|".join(
        [re.escape(p) for p in BOILERPLATE_PHRASES]
        + [r"©\s*\d{4}", r"^voltar$", r"^compartilhar vaga$"]
    ),
    re.IGNORECASE,
)

MIN_LINE_LENGTH = 5

BLOCK_TAGS = [
    "p", "div", "li", "ul", "ol", "section", "article", "header", "footer",
    "h1", "h2", "h3", "h4", "h5", "h6", "tr", "table", "blockquote", "pre",
]


def fetch_html(url: str) -> str:
    parsed = urlparse((url or "").strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise UrlContentError(f"Invalid URL: {url!r}. Please use an http(s) link.")

    proxy = get_fetch_proxy_url()
    target = proxy.format(url=quote(url, safe="")) if proxy else url

    try:
        response = requests.get(target, headers=HEADERS, timeout=FETCH_TIMEOUT)
    except requests.RequestException as e:
        raise UrlContentError(f"Failed to fetch from URL: {e}") from e

    if not response.ok:
        raise UrlContentError(f"Failed to fetch from URL with status: {response.status_code}")

    if proxy:
        # allorigins-style proxies wrap the page as {"contents": "<html>..."}
        try:
            html = (response.json() or {}).get("contents") or ""
        except ValueError as e:
            raise UrlContentError("Proxy returned an unexpected response.") from e
    else:
        html = response.text or ""

    if not html.strip():
        raise UrlContentError("Could not retrieve content from the URL.")
    logger.info("Fetched %d characters of HTML from %s", len(html), parsed.netloc)
    return html


def extract_article_text(html: str) -> str:
    """Main article text, one block element per line."""
    try:
        summary_html = Document(html).summary(html_partial=True)
    except Unparseable as e:
        raise UrlContentError("Could not extract main content using Readability.") from e
    soup = BeautifulSoup(summary_html, "html.parser")

    for br in soup.find_all("br"):
        br.replace_with("\n")
    for tag in soup.find_all(BLOCK_TAGS):
        tag.insert_after("\n")

    text = soup.get_text()
    if not text.strip():
        raise UrlContentError("Could not extract main content using Readability.")
    return text


def clean_article_text(text: str) -> str:
    text = text.replace("\t", " ")
    text = re.sub(r" +", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)

    cleaned_lines = []
    for line in text.split("\n"):
        stripped = line.strip()
        if len(stripped) < MIN_LINE_LENGTH or BOILERPLATE_RE.search(stripped):
            continue
        cleaned_lines.append(stripped)

    return "\n".join(cleaned_lines).strip()


def parse_url_content(url: str) -> str:
    html = fetch_html(url)
    text = clean_article_text(extract_article_text(html))
    if not text:
        raise UrlContentError("Could not extract main content using Readability.")
    logger.info("Extracted %d characters of job description from URL", len(text))
    return text
