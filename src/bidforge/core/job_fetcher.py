from __future__ import annotations

import logging

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36"
)

_NOISE_TAGS = ["script", "style", "noscript", "nav", "header", "footer", "form", "svg"]
_CONTENT_SELECTORS = ("main", "article", "[role=main]")


def html_to_job_text(html: str) -> str:
    """Visible text of a posting, preferring the page's main content region."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(_NOISE_TAGS):
        tag.extract()

    root = soup
    for selector in _CONTENT_SELECTORS:
        found = soup.select_one(selector)
        if found is not None and found.get_text(strip=True):
            root = found
            break

    lines = [line.strip() for line in root.get_text("\n").splitlines() if line.strip()]
    return "\n".join(lines)


def fetch_job_description(url: str, timeout_sec: int = 30) -> str:
    try:
        response = requests.get(url, timeout=timeout_sec, headers={"User-Agent": USER_AGENT})
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("Failed to fetch job URL %s: %s", url, exc)
        return ""

    text = html_to_job_text(response.text)
    if not text:
        logger.warning("No readable text at job URL %s", url)
    return text
