# -*- coding: utf-8 -*-
"""
Core Module - Configuration and path resolution for progcat.

License
-------
MIT License
Copyright (c) 2026 progcat contributors
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""
