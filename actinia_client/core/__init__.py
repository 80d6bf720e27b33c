# -*- coding: utf-8 -*-
"""
Core Module - Process chain assembly and job tracking.

Contains the parameter and module descriptors, the chain builder, job
submission and status tracking, chain files and configuration. Nothing
here talks HTTP directly; remote calls go through a transport object.

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
