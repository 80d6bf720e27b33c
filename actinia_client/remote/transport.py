# -*- coding: utf-8 -*-
"""
HTTP Transport - Request/response plumbing for the actinia REST API.

Wraps a ``requests.Session`` with basic authentication and maps every
failure (connection errors, timeouts, non-success HTTP codes, bodies
that are not JSON, unsuccessful envelopes) to ``RemoteUnavailable``.
No request is ever retried.

Dependencies
------------
requests

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
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

# Third-party
import requests

# actinia_client internal
from actinia_client.core.config import ClientConfig
from actinia_client.core.errors import RemoteUnavailable

logger = logging.getLogger(__name__)


_API_PREFIX = "latest"


def normalize_base_url(url: str) -> str:
    """Ensure the base URL ends with exactly one slash."""
    return url if url.endswith('/') else url + '/'


class ActiniaTransport:
    """Blocking HTTP access to one actinia instance.

    Parameters
    ----------
    url : str
        Base URL, with or without a trailing slash.
    username : str
        Basic auth user. Authentication is disabled when empty.
    password : str
        Basic auth password.
    timeout : float
        Timeout in seconds applied to every request. Default 30.0.
    session : Optional[requests.Session]
        Session to use instead of creating one.
    user_agent : str
        User-Agent header.
    """

    def __init__(
        self,
        url: str,
        username: str = "",
        password: str = "",
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
        user_agent: str = "actinia-client",
    ) -> None:
        self._url = normalize_base_url(url)
        self._timeout = timeout
        self._session = session or requests.Session()
        if username:
            self._session.auth = (username, password)
        self._session.headers.update({
            'Accept': 'application/json',
            'User-Agent': user_agent,
        })

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        session: Optional[requests.Session] = None,
    ) -> 'ActiniaTransport':
        return cls(
            url=config.url,
            username=config.username,
            password=config.password,
            timeout=config.timeout,
            session=session,
            user_agent=config.user_agent,
        )

    @property
    def url(self) -> str:
        return self._url

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> 'ActiniaTransport':
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    def endpoint(self, *segments: str) -> str:
        """Build an API URL from path segments, quoting each one."""
        path = '/'.join(quote(s, safe='') for s in segments)
        return f"{self._url}{_API_PREFIX}/{path}"

    def _request(
        self,
        method: str,
        url: str,
        operation: str,
        target: str,
        json_body: Optional[Mapping[str, Any]] = None,
        accept_error_body: bool = False,
    ) -> Any:
        logger.debug("%s %s (%s)", method, url, operation)
        try:
            resp = self._session.request(
                method, url, json=json_body, timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("Unable to %s for %s: %s", operation, target, e)
            logger.debug("Stack trace:", exc_info=True)
            raise RemoteUnavailable(
                f"Unable to {operation} for {target}: {e}",
                operation=operation,
                target=target,
            ) from e

        try:
            body = resp.json()
        except ValueError as e:
            body = None
            decode_error: Optional[Exception] = e
        else:
            decode_error = None

        if not resp.ok and not (accept_error_body and isinstance(body, dict)):
            logger.warning(
                "Unable to %s for %s: HTTP %s", operation, target, resp.status_code,
            )
            raise RemoteUnavailable(
                f"Unable to {operation} for {target}: "
                f"{_error_message(body, resp)}",
                operation=operation,
                target=target,
                status_code=resp.status_code,
            )

        if decode_error is not None:
            logger.warning("Unable to %s for %s: response is not JSON", operation, target)
            raise RemoteUnavailable(
                f"Unable to {operation} for {target}: response is not JSON",
                operation=operation,
                target=target,
                status_code=resp.status_code,
            ) from decode_error
        return body

    def get_json(self, url: str, operation: str, target: str) -> Any:
        return self._request('GET', url, operation, target)

    def post_json(
        self,
        url: str,
        body: Mapping[str, Any],
        operation: str,
        target: str,
    ) -> Any:
        return self._request('POST', url, operation, target, json_body=body)

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def get_locations(self) -> List[str]:
        """Names of the locations visible to the user."""
        body = self.get_json(
            self.endpoint('locations'), 'get locations', 'locations',
        )
        _require_success(body, 'get locations', 'locations')
        names = body.get('projects', body.get('locations'))
        return _string_list(names, 'get locations', 'locations')

    def get_mapsets(self, location: str) -> List[str]:
        target = location
        body = self.get_json(
            self.endpoint('locations', location, 'mapsets'),
            'get mapsets', target,
        )
        return _process_results(body, 'get mapsets', target)

    def get_raster_layers(self, location: str, mapset: str) -> List[str]:
        target = f"{location}/{mapset}"
        body = self.get_json(
            self.endpoint('locations', location, 'mapsets', mapset, 'raster_layers'),
            'get raster layers', target,
        )
        return _process_results(body, 'get raster layers', target)

    def get_space_time_raster_datasets(self, location: str, mapset: str) -> List[str]:
        target = f"{location}/{mapset}"
        body = self.get_json(
            self.endpoint('locations', location, 'mapsets', mapset, 'strds'),
            'get space time datasets', target,
        )
        return _process_results(body, 'get space time datasets', target)

    def get_modules(self) -> List[Dict[str, Any]]:
        """Raw module records (``id`` and ``description`` each)."""
        body = self.get_json(self.endpoint('modules'), 'get modules', 'modules')
        _require_success(body, 'get modules', 'modules')
        processes = body.get('processes')
        if not isinstance(processes, list):
            raise RemoteUnavailable(
                "Unable to get modules: 'processes' is not a list",
                operation='get modules',
                target='modules',
            )
        return processes

    # ------------------------------------------------------------------
    # Operations consumed by the core
    # ------------------------------------------------------------------

    def fetch_module_detail(self, module_name: str) -> Dict[str, Any]:
        """Fetch a module's inputs and outputs in one request.

        Returns
        -------
        dict
            ``{'inputs': [...], 'outputs': [...]}`` holding the raw
            ``parameters`` and ``returns`` records.
        """
        operation = 'update module details'
        body = self.get_json(
            self.endpoint('modules', module_name), operation, module_name,
        )
        if not isinstance(body, dict):
            raise RemoteUnavailable(
                f"Unable to {operation} for {module_name}: "
                f"response is not an object",
                operation=operation,
                target=module_name,
            )
        return {
            'inputs': body.get('parameters') or [],
            'outputs': body.get('returns') or [],
        }

    def post_chain(
        self,
        location: str,
        mapset: str,
        document: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """POST a process chain document to the processing endpoint."""
        target = f"location {location} and mapset {mapset}"
        body = self.post_json(
            self.endpoint('locations', location, 'mapsets', mapset, 'processing'),
            document,
            'run process chain',
            target,
        )
        if not isinstance(body, dict):
            raise RemoteUnavailable(
                f"Unable to run process chain for {target}: "
                f"response is not an object",
                operation='run process chain',
                target=target,
            )
        return body

    def fetch_status(self, url: str) -> Dict[str, Any]:
        """GET a status URL.

        actinia reports failed jobs with an error HTTP code and the
        status in the body, so JSON objects are returned regardless of
        the code.
        """
        body = self._request(
            'GET', url, 'fetch process status', url, accept_error_body=True,
        )
        if not isinstance(body, dict) or 'status' not in body:
            raise RemoteUnavailable(
                f"Unable to fetch process status for {url}: no status field",
                operation='fetch process status',
                target=url,
            )
        return body


def _error_message(body: Any, resp: requests.Response) -> str:
    if isinstance(body, dict):
        for key in ('message', 'error'):
            if body.get(key):
                return f"HTTP {resp.status_code}: {body[key]}"
    return f"HTTP {resp.status_code}"


def _require_success(body: Any, operation: str, target: str) -> None:
    if not isinstance(body, dict) or body.get('status') != 'success':
        raise RemoteUnavailable(
            f"Unable to {operation}: the request was unsuccessful",
            operation=operation,
            target=target,
        )


def _string_list(value: Any, operation: str, target: str) -> List[str]:
    if not isinstance(value, list):
        raise RemoteUnavailable(
            f"Unable to {operation} for {target}: result is not a list",
            operation=operation,
            target=target,
        )
    return [str(v) for v in value]


def _process_results(body: Any, operation: str, target: str) -> List[str]:
    if not isinstance(body, dict):
        raise RemoteUnavailable(
            f"Unable to {operation} for {target}: response is not an object",
            operation=operation,
            target=target,
        )
    return _string_list(body.get('process_results'), operation, target)
