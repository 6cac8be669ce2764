# -*- coding: utf-8 -*-
"""
Upload Module - Flashing programs onto attached boards.

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
