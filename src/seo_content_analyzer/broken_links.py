"""
Broken internal link detection.

Sends one HEAD request per unique outgoing link and reports every
(source page, target) pair whose target cannot be fetched.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Iterable, Optional
from urllib.parse import urldefrag, urljoin, urlparse

import requests

from .config import BrokenLinkPolicy
from .link_distribution import PageInput, coerce_pages
from .models import BrokenLink

logger = logging.getLogger(__name__)

DEADLINE_REASON = "deadline exceeded"


@dataclass
class _CheckOutcome:
    ok: bool
    status_code: Optional[int] = None
    reason: str = ""


def _resolve(source_url: str, target: str) -> Optional[str]:
    resolved, _fragment = urldefrag(urljoin(source_url, target))
    if urlparse(resolved).scheme not in ("http", "https"):
        return None
    return resolved


def _suggestion(outcome: _CheckOutcome) -> str:
    if outcome.reason == DEADLINE_REASON:
        return "Check timed out before this link was verified; re-run the check or verify it manually."
    if outcome.status_code is None:
        return "Could not reach the URL. Verify it is correct and that the server is available."
    if outcome.status_code in (404, 410):
        return "Remove the link or point it to an existing page."
    if outcome.status_code in (401, 403):
        return "Target requires authorization. Link to a public page instead."
    if outcome.status_code >= 500:
        return "Target server returned an error. Check the page or remove the link."
    return "Update or remove the link."


def _check_url(url: str, policy: BrokenLinkPolicy, session: Optional[requests.Session]) -> _CheckOutcome:
    client = session if session is not None else requests
    try:
        response = client.head(
            url,
            headers={"User-Agent": policy.user_agent},
            timeout=policy.request_timeout,
            allow_redirects=True,
        )
    except requests.Timeout:
        return _CheckOutcome(ok=False, reason=f"Timed out after {policy.request_timeout}s")
    except requests.RequestException as e:
        return _CheckOutcome(ok=False, reason=f"Request failed: {e}")

    status = response.status_code
    if 200 <= status < 400:
        return _CheckOutcome(ok=True, status_code=status)
    return _CheckOutcome(ok=False, status_code=status, reason=f"HTTP {status}")


def detect_broken_links(
    pages: Iterable[PageInput],
    policy: Optional[BrokenLinkPolicy] = None,
    session: Optional[requests.Session] = None,
) -> list[BrokenLink]:
    """
    Check every outgoing internal link for reachability.

    Redirects are followed. A link is broken when the final status is
    outside 2xx/3xx, when the request fails, or when the overall
    deadline passes before the link was checked. Nothing is retried.

    Args:
        pages: Pages whose internal_links_to are checked.
        policy: Timeouts and concurrency. Defaults to BrokenLinkPolicy().
        session: Optional requests.Session to send requests with.

    Returns:
        One BrokenLink per broken (source page, target) pair, in page
        order then link order.

    Raises:
        InvalidPageDataError: If a page record is malformed. Network
        failures never raise.
    """
    policy = policy or BrokenLinkPolicy()
    records = coerce_pages(pages)

    # (source, target as written, resolved URL)
    links: list[tuple[str, str, str]] = []
    for page in records:
        for target in page.internal_links_to:
            resolved = _resolve(page.url, target)
            if resolved is None:
                logger.debug(f"Skipping non-HTTP link {target!r} on {page.url}")
                continue
            links.append((page.url, target, resolved))

    unique_urls = list(dict.fromkeys(resolved for _, _, resolved in links))
    if not unique_urls:
        return []

    logger.info(f"Checking {len(unique_urls)} unique link(s) from {len(records)} page(s)")

    outcomes: dict[str, _CheckOutcome] = {}
    executor = ThreadPoolExecutor(max_workers=min(policy.max_workers, len(unique_urls)))
    try:
        futures = {
            executor.submit(_check_url, url, policy, session): url for url in unique_urls
        }
        done, not_done = wait(futures, timeout=policy.overall_timeout)
        for future in done:
            url = futures[future]
            try:
                outcomes[url] = future.result()
            except Exception as e:
                logger.error(f"Link check for {url} failed unexpectedly: {e}")
                outcomes[url] = _CheckOutcome(ok=False, reason=f"Check failed: {e}")
        if not_done:
            logger.warning(
                f"Link check deadline of {policy.overall_timeout}s reached; "
                f"{len(not_done)} link(s) left unchecked"
            )
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    broken = []
    for source, target, resolved in links:
        outcome = outcomes.get(resolved) or _CheckOutcome(ok=False, reason=DEADLINE_REASON)
        if outcome.ok:
            continue
        broken.append(BrokenLink(
            source_url=source,
            target_url=target,
            status_code=outcome.status_code,
            reason=outcome.reason,
            suggestion=_suggestion(outcome),
        ))

    logger.info(f"Found {len(broken)} broken link(s)")
    return broken
