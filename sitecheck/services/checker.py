"""Concurrent checker: GETs every collected path against a running site.

One asyncio task is started per URL.  A semaphore of ``max_workers`` slots
bounds how many requests are in flight, and each admitted request runs under
its own deadline.  A run-level cancellation event (set on SIGINT) stops tasks
still waiting for a slot and aborts requests already in flight.

Tasks share one event loop, so nothing here may block it: requests only
suspend at admission, at the send and at the final join.  Collection
(:func:`~sitecheck.services.collector.collect_urls`) is synchronous file I/O
and runs to completion before the loop is started.
"""

import asyncio
import logging
import signal
from contextlib import contextmanager
from typing import List, Optional, Sequence

import httpx

from sitecheck.models.check_config import CheckConfig
from sitecheck.models.check_result import CheckError, CheckResult, ErrorKind

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_MESSAGE = "request timeout"
RUN_CANCELLED_MESSAGE = "run cancelled"


def build_client(config: CheckConfig) -> httpx.AsyncClient:
    """Return the HTTP client shared by every check of one run.

    The client carries no timeout of its own; each request's deadline is
    enforced by the checker so a timeout can be told apart from other errors.
    """
    limits = httpx.Limits(
        max_connections=config.workers,
        max_keepalive_connections=config.workers,
    )
    return httpx.AsyncClient(follow_redirects=True, timeout=None, limits=limits)


def _cancelled(url: str) -> CheckResult:
    return CheckResult(
        url=url,
        error=CheckError(kind=ErrorKind.CANCELLED, message=RUN_CANCELLED_MESSAGE),
    )


async def _discard(*tasks: asyncio.Future) -> None:
    """Cancel unfinished *tasks* and wait until they have unwound."""
    for task in tasks:
        if not task.done():
            task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)


async def _admit(gate: asyncio.Semaphore, cancel: asyncio.Event) -> bool:
    """Wait for a slot in *gate*; return False if the run is cancelled first.

    On True the caller owns one slot and must release it.
    """
    if cancel.is_set():
        return False

    acquire = asyncio.ensure_future(gate.acquire())
    stop = asyncio.ensure_future(cancel.wait())
    try:
        await asyncio.wait({acquire, stop}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        await _discard(acquire, stop)

    admitted = acquire.done() and not acquire.cancelled()
    if admitted and cancel.is_set():
        gate.release()
        return False
    return admitted


async def _send(client: httpx.AsyncClient, request: httpx.Request) -> int:
    """Send *request* and close the response without reading its body."""
    response = await client.send(request, stream=True)
    await response.aclose()
    return response.status_code


async def _fetch_status(
    client: httpx.AsyncClient,
    base_url: str,
    url: str,
    timeout: float,
    cancel: asyncio.Event,
) -> CheckResult:
    try:
        request = client.build_request("GET", base_url + url)
    except httpx.InvalidURL as exc:
        return CheckResult(
            url=url, error=CheckError(kind=ErrorKind.INVALID_URL, message=str(exc))
        )

    send = asyncio.ensure_future(_send(client, request))
    stop = asyncio.ensure_future(cancel.wait())
    try:
        done, _ = await asyncio.wait(
            {send, stop}, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        await _discard(send, stop)

    if send in done:
        exc = send.exception()
        if exc is None:
            return CheckResult(url=url, status=send.result())
        if isinstance(exc, httpx.InvalidURL):
            return CheckResult(
                url=url, error=CheckError(kind=ErrorKind.INVALID_URL, message=str(exc))
            )
        if isinstance(exc, httpx.HTTPError):
            message = str(exc) or type(exc).__name__
            return CheckResult(
                url=url, error=CheckError(kind=ErrorKind.TRANSPORT, message=message)
            )
        # Custom transports may raise outside the httpx hierarchy
        logger.warning("Checker: unexpected error for %s – %r", url, exc)
        return CheckResult(
            url=url,
            error=CheckError(kind=ErrorKind.TRANSPORT, message=f"{type(exc).__name__}: {exc}"),
        )

    if stop in done:
        return _cancelled(url)

    return CheckResult(
        url=url, error=CheckError(kind=ErrorKind.TIMEOUT, message=REQUEST_TIMEOUT_MESSAGE)
    )


async def _check_one(
    client: httpx.AsyncClient,
    base_url: str,
    url: str,
    gate: asyncio.Semaphore,
    timeout: float,
    cancel: asyncio.Event,
) -> CheckResult:
    if not await _admit(gate, cancel):
        return _cancelled(url)
    try:
        result = await _fetch_status(client, base_url, url, timeout, cancel)
    finally:
        gate.release()
    logger.debug("Checker: %s -> %s", url, result.status or result.error)
    return result


async def check_urls(
    client: httpx.AsyncClient,
    base_url: str,
    urls: Sequence[str],
    max_workers: int = 100,
    timeout: float = 300.0,
    cancel: Optional[asyncio.Event] = None,
) -> List[CheckResult]:
    """GET ``base_url + url`` for every entry of *urls* concurrently.

    Args:
        client:      HTTP client used for every request.
        base_url:    Site root, without a trailing slash.
        urls:        Site-relative paths, each starting with ``/``.
        max_workers: Maximum number of requests in flight at once.
        timeout:     Per-request deadline in seconds.
        cancel:      Run-level cancellation; once set, waiting checks are not
                     issued and in-flight requests are aborted.

    Returns:
        One :class:`CheckResult` per input URL, index-aligned with *urls*.
    """
    if max_workers < 1:
        raise ValueError("max_workers must be at least 1.")
    if cancel is None:
        cancel = asyncio.Event()

    gate = asyncio.Semaphore(max_workers)
    results: List[Optional[CheckResult]] = [None] * len(urls)

    async def worker(index: int, url: str) -> None:
        results[index] = await _check_one(client, base_url, url, gate, timeout, cancel)

    await asyncio.gather(*(worker(i, url) for i, url in enumerate(urls)))
    return results  # type: ignore[return-value]


@contextmanager
def _cancel_on_interrupt(cancel: asyncio.Event):
    """Set *cancel* when SIGINT arrives while the block runs."""
    loop = asyncio.get_running_loop()

    def _interrupted() -> None:
        logger.warning("Interrupted: cancelling outstanding checks")
        cancel.set()

    installed = True
    try:
        loop.add_signal_handler(signal.SIGINT, _interrupted)
    except (NotImplementedError, RuntimeError, ValueError) as exc:
        # Windows loops and non-main threads cannot install signal handlers
        logger.debug("Checker: SIGINT not wired to cancellation – %s", exc)
        installed = False

    try:
        yield
    finally:
        if installed:
            loop.remove_signal_handler(signal.SIGINT)


async def run_check(config: CheckConfig, urls: Sequence[str]) -> List[CheckResult]:
    """Check *urls* against ``config.base_url`` with a client owned by this run."""
    cancel = asyncio.Event()
    async with build_client(config) as client:
        with _cancel_on_interrupt(cancel):
            return await check_urls(
                client,
                config.base_url,
                urls,
                max_workers=config.workers,
                timeout=config.timeout,
                cancel=cancel,
            )
