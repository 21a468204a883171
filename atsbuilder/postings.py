"""Import job description text from HTML or a posting URL."""

from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from .errors import FetchError, InvalidArgumentError, RetryError
from .logger import get_logger
from .retry import TransientHTTPError, exponential_backoff, should_retry_http_status

USER_AGENT = "atsbuilder/0.1 (+job description import)"
DROP_TAGS = ["script", "style", "noscript", "template", "svg"]


def html_to_text(html: str) -> str:
    """Visible text of an HTML job description, one non-empty line per block."""
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup.find_all(DROP_TAGS):
        tag.decompose()
    lines = (" ".join(line.split()) for line in soup.get_text("\n").splitlines())
    return "\n".join(line for line in lines if line)


def _get(url: str, timeout: float) -> requests.Response:
    resp = requests.get(url, timeout=timeout, headers={"User-Agent": USER_AGENT})
    if should_retry_http_status(resp.status_code):
        raise TransientHTTPError(resp.status_code, url)
    return resp


def _validate_url(url: str) -> None:
    parsed = urlparse(url or "")
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidArgumentError(f"Job posting URL must be an absolute http(s) URL: {url!r}")


def fetch_job_description(
    url: str,
    timeout: float = 15.0,
    retries: int = 3,
    base_delay: float = 1.0,
) -> str:
    """Fetch a job posting page and return its text.

    Timeouts, connection errors and retryable status codes (429, 5xx) are
    retried with exponential backoff.

    Raises:
        InvalidArgumentError: If the URL is not an absolute http(s) URL
        FetchError: On any HTTP error, exhausted retries or an empty page
    """
    _validate_url(url)
    logger = get_logger()
    logger.record_fetch_attempt()

    def on_retry(attempt, exc, delay):
        logger.warning("Retrying job posting fetch", url=url, attempt=attempt, delay=delay, error=str(exc))

    fetch = exponential_backoff(
        max_retries=retries,
        base_delay=base_delay,
        exceptions=(requests.exceptions.Timeout, requests.exceptions.ConnectionError, TransientHTTPError),
        on_retry=on_retry,
    )(_get)

    try:
        resp = fetch(url, timeout)
        resp.raise_for_status()
    except RetryError as e:
        cause = e.__cause__
        logger.record_fetch_failure(type(cause).__name__)
        logger.error("Job posting fetch failed after retries", url=url, error=str(cause))
        if isinstance(cause, requests.exceptions.Timeout):
            raise FetchError(f"Job posting request timed out. Try again later: {url}") from e
        raise FetchError(f"Job posting request failed ({cause}): {url}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "HTTPError"
        logger.record_fetch_failure(f"HTTPError_{status}")
        if status == 404:
            logger.warning("Job posting not found", url=url, status=404)
            raise FetchError(f"Job posting not found (404): {url}") from e
        logger.error("Job posting request failed", url=url, status=status)
        raise FetchError(f"Job posting request failed ({status}): {url}") from e
    except requests.exceptions.RequestException as e:
        logger.record_fetch_failure("RequestException")
        logger.error("Job posting request error", url=url, error=str(e))
        raise FetchError(f"Job posting request error: {e}") from e

    content_type = resp.headers.get("Content-Type", "")
    if "html" in content_type or resp.text.lstrip().startswith("<"):
        text = html_to_text(resp.text)
    else:
        text = resp.text.strip()

    if not text:
        logger.record_fetch_failure("EmptyPosting")
        raise FetchError(f"No job description text found at {url}")

    logger.record_fetch_success()
    logger.info("Fetched job posting", url=url, characters=len(text))
    return text
