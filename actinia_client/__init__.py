# -*- coding: utf-8 -*-
"""
actinia_client - Python client for the actinia geoprocessing service.

Lists locations, mapsets, raster layers, space time datasets and
processing modules of an actinia instance, assembles process chains
from modules and parameter values, submits them and tracks the
resulting jobs.

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

__version__ = "0.1.0"

from actinia_client.core.chain import (
    ChainStep,
    ParameterBinding,
    ProcessChain,
    build_process_chain,
)
from actinia_client.core.errors import (
    ActiniaError,
    ArityMismatch,
    MalformedDescriptor,
    RemoteUnavailable,
)
from actinia_client.core.job import ProcessStatus, submit_process_chain
from actinia_client.core.module import Module
from actinia_client.core.parameter import Parameter
from actinia_client.remote.client import ActiniaClient


__all__: list = [
    "ActiniaClient",
    "ActiniaError",
    "ArityMismatch",
    "ChainStep",
    "MalformedDescriptor",
    "Module",
    "Parameter",
    "ParameterBinding",
    "ProcessChain",
    "ProcessStatus",
    "RemoteUnavailable",
    "build_process_chain",
    "submit_process_chain",
]
