# -*- coding: utf-8 -*-
"""
Errors - Exception hierarchy for the actinia client.

All errors raised by the client derive from ``ActiniaError`` so callers
can catch one type at the boundary of their own code.

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
from typing import Optional


class ActiniaError(RuntimeError):
    """Base class for everything that goes wrong talking to actinia."""


class MalformedDescriptor(ActiniaError):
    """A decoded record from the service is missing a field or has the
    wrong shape.

    Parameters
    ----------
    message : str
        Human-readable description.
    record : Optional[object]
        The offending record, kept for inspection.
    """

    def __init__(self, message: str, record: Optional[object] = None) -> None:
        super().__init__(message)
        self.record = record


class RemoteUnavailable(ActiniaError):
    """A call to the service failed.

    Covers transport errors, non-success HTTP status codes, bodies that
    are not JSON and envelopes reporting an unsuccessful status.

    Parameters
    ----------
    message : str
        Human-readable description.
    operation : str
        Name of the operation that was attempted (e.g. ``"post_chain"``).
    target : str
        Identifier of what was being accessed (URL, module name, ...).
    status_code : Optional[int]
        HTTP status code, if a response was received.
    """

    def __init__(
        self,
        message: str,
        operation: str = "",
        target: str = "",
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.target = target
        self.status_code = status_code

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is not None:
            return f"{base} (HTTP {self.status_code})"
        return base


class ArityMismatch(ActiniaError, ValueError):
    """Modules and parameter maps were supplied in different numbers.

    Parameters
    ----------
    module_count : int
    parameter_count : int
    """

    def __init__(self, module_count: int, parameter_count: int) -> None:
        super().__init__(
            f"Got {module_count} modules but {parameter_count} parameter "
            f"maps; they are paired by position and must match in length."
        )
        self.module_count = module_count
        self.parameter_count = parameter_count
