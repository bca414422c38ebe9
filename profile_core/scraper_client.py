from __future__ import annotations

import logging
import re

import requests

from profile_core.config import Settings

logger = logging.getLogger(__name__)

PROFILE_URL_PATTERN = re.compile(r"^https?://(www\.)?linkedin\.com/in/[\w-]+/?$")


class ScraperError(RuntimeError):
    def __init__(self, message: str, retry_after: int | None = None, troubleshooting: tuple[str, ...] = ()):
        super().__init__(message)
        self.retry_after = retry_after
        self.troubleshooting = troubleshooting


def is_profile_url(url: str) -> bool:
    return bool(PROFILE_URL_PATTERN.match((url or "").strip()))


def _failure(payload, fallback: str) -> ScraperError:
    if not isinstance(payload, dict):
        return ScraperError(fallback)
    retry_after = payload.get("retryAfter")
    hints = payload.get("troubleshooting")
    return ScraperError(
        payload.get("error") or fallback,
        retry_after=retry_after if isinstance(retry_after, int) else None,
        troubleshooting=tuple(h for h in hints if isinstance(h, str)) if isinstance(hints, list) else (),
    )


def fetch_profile_payload(profile_url: str, settings: Settings) -> dict:
    profile_url = (profile_url or "").strip()
    if not is_profile_url(profile_url):
        raise ScraperError("Invalid LinkedIn profile URL. Format: https://linkedin.com/in/username")

    endpoint = f"{settings.scraper_api_url}/api/scrape"
    logger.info("Requesting scrape of %s from %s", profile_url, endpoint)
    try:
        response = requests.post(
            endpoint,
            json={"profileUrl": profile_url},
            timeout=settings.scraper_timeout,
        )
    except requests.RequestException as exc:
        logger.error("Scraper request failed: %s", exc)
        raise ScraperError(f"Could not reach scraper at {settings.scraper_api_url}: {exc}") from exc

    if not response.ok:
        try:
            body = response.json()
        except ValueError:
            body = None
        error = _failure(body, f"Scraper returned HTTP {response.status_code}")
        logger.warning("Scrape of %s failed with HTTP %s: %s", profile_url, response.status_code, error)
        raise error

    try:
        payload = response.json()
    except ValueError as exc:
        raise ScraperError("Scraper returned a non-JSON response") from exc
    if not isinstance(payload, dict) or not payload.get("success"):
        raise _failure(payload, "Scraper reported a failure without details")

    data = payload.get("data")
    if not isinstance(data, dict):
        raise ScraperError("Scraper response is missing profile data")
    logger.info("Scraped profile %s", data.get("name") or profile_url)
    return data


def scraper_health(settings: Settings) -> dict:
    try:
        response = requests.get(f"{settings.scraper_api_url}/api/health", timeout=10)
        response.raise_for_status()
        return response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Scraper health check failed: %s", exc)
        raise ScraperError(f"Scraper at {settings.scraper_api_url} is unavailable") from exc
