# -*- coding: utf-8 -*-
"""
Job Submission - Submit process chains and track their status.

``submit_process_chain`` posts a chain to the processing endpoint of a
location/mapset pair and returns a ``ProcessStatus`` bound to the
status URL the service hands back. The tracker caches only the latest
status string; callers poll it with ``refresh()`` and decide for
themselves when to stop.

Author
------
geoint.org

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import logging
from typing import Any, Mapping, Optional

# actinia_client internal
from actinia_client.core.chain import ProcessChain
from actinia_client.core.errors import RemoteUnavailable

logger = logging.getLogger(__name__)


# Status strings reported by actinia. The vocabulary is open-ended and
# statuses are never validated against it.
STATUS_ACCEPTED = "accepted"
STATUS_RUNNING = "running"
STATUS_FINISHED = "finished"
STATUS_ERROR = "error"
STATUS_TERMINATED = "terminated"

TERMINAL_STATUSES = frozenset({STATUS_FINISHED, STATUS_ERROR, STATUS_TERMINATED})


class ProcessStatus:
    """Monitor a submitted process chain.

    Parameters
    ----------
    url : str
        Absolute status endpoint returned by the submission.
    transport : object
        Anything with a ``fetch_status(url) -> dict`` method, normally
        an ``ActiniaTransport``.
    """

    def __init__(self, url: str, transport: Any) -> None:
        self._url = url
        self._transport = transport
        self._status: Optional[str] = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def status(self) -> Optional[str]:
        """Last status observed, e.g. 'accepted', 'finished' or 'error'.

        None until the first successful ``refresh()``.
        """
        return self._status

    def refresh(self) -> str:
        """Fetch the current status from the service.

        The cached value is overwritten with whatever the service
        reports; no transition order is enforced.

        Returns
        -------
        str
            The new status.

        Raises
        ------
        RemoteUnavailable
            If the poll fails. The cached status is left unchanged.
        """
        try:
            response = self._transport.fetch_status(self._url)
        except RemoteUnavailable:
            logger.warning(
                "Status poll failed for %s, keeping status %r",
                self._url, self._status,
            )
            raise
        if not isinstance(response, Mapping) or 'status' not in response:
            raise RemoteUnavailable(
                "Status response has no 'status' field",
                operation='fetch_status',
                target=self._url,
            )
        self._status = str(response['status'])
        logger.debug("Process %s is %s", self._url, self._status)
        return self._status

    # Convenience readers of the cached value; they never poll.

    @property
    def is_terminal(self) -> bool:
        return self._status in TERMINAL_STATUSES

    @property
    def is_finished(self) -> bool:
        return self._status == STATUS_FINISHED

    @property
    def is_error(self) -> bool:
        return self._status in (STATUS_ERROR, STATUS_TERMINATED)

    def __repr__(self) -> str:
        return f"ProcessStatus(url={self._url!r}, status={self._status!r})"


def _status_url(response: Any, target: str) -> str:
    try:
        url = response['urls']['status']
    except (KeyError, TypeError) as e:
        raise RemoteUnavailable(
            "Submission response has no status URL",
            operation='post_chain',
            target=target,
        ) from e
    if not isinstance(url, str) or not url:
        raise RemoteUnavailable(
            "Submission response has an empty status URL",
            operation='post_chain',
            target=target,
        )
    return url


def submit_process_chain(
    transport: Any,
    location: str,
    mapset: str,
    chain: ProcessChain,
) -> ProcessStatus:
    """Submit a process chain for execution.

    Parameters
    ----------
    transport : object
        Provides ``post_chain(location, mapset, document) -> dict`` and
        ``fetch_status(url) -> dict``.
    location : str
        Location to run in.
    mapset : str
        Mapset to run in.
    chain : ProcessChain
        Chain built with ``build_process_chain``.

    Returns
    -------
    ProcessStatus
        Tracker for the submitted job. Its status is unset until the
        first ``refresh()``.

    Raises
    ------
    RemoteUnavailable
        If the submission fails or the response carries no status URL.
        Submissions are never retried.
    """
    target = f"{location}/{mapset}"
    logger.debug(
        "Submitting process chain of %d steps to %s", len(chain), target
    )
    response = transport.post_chain(location, mapset, chain.to_dict())
    url = _status_url(response, target)
    logger.info("Process chain accepted for %s, status at %s", target, url)
    return ProcessStatus(url, transport)
