# -*- coding: utf-8 -*-
"""
Catalog Module - Acquisition and reconciliation of program catalogs.

Downloads, validates and localizes program catalogs, and decides which
of the preinstalled, validated and staging catalogs is presented.

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
