# -*- coding: utf-8 -*-
"""
Remote Module - HTTP access to an actinia instance.

Provides the requests-based transport, location/mapset discovery, the
module registry and the ActiniaClient facade.

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
