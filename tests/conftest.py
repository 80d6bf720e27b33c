# -*- coding: utf-8 -*-
"""
Shared fixtures for actinia_client tests.

Provides raw parameter records shaped like the module detail endpoint's
responses and a fake transport recording the calls made to it.

Author
------
geoint.org

Created
-------
2026-10-19
"""

from unittest.mock import MagicMock

import pytest


def make_record(name, type_="string", optional=False, description="", **extra):
    """Raw parameter record as returned in ``parameters``/``returns``."""
    record = {
        'name': name,
        'description': description or f"The {name} parameter",
        'optional': optional,
        'schema': {'type': type_},
    }
    record.update(extra)
    return record


def make_detail(inputs=(), outputs=()):
    """Module detail record as returned by ``fetch_module_detail``."""
    return {
        'inputs': [make_record(n) for n in inputs],
        'outputs': [make_record(n) for n in outputs],
    }


@pytest.fixture
def transport():
    """Mock transport with a detail fetcher serving modules A and B."""
    details = {
        'A': make_detail(inputs=['raster']),
        'B': make_detail(inputs=['red', 'nir'], outputs=['output']),
    }
    t = MagicMock()
    t.fetch_module_detail.side_effect = lambda name: details[name]
    return t
