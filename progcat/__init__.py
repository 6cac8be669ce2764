# -*- coding: utf-8 -*-
"""
progcat - Program catalog manager for microcontroller boards.

Keeps a local mirror of a remotely published catalog of programs and
flashes a chosen program onto an attached board.

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

__version__ = "0.1.0"

__all__: list = ["__version__"]
