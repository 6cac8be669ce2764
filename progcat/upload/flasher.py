# -*- coding: utf-8 -*-
"""
Flasher - Write a compiled program onto a microcontroller board.

Defines the flashing capability used by uploads and an implementation
that drives ``avrdude`` for the common AVR-based Arduino boards.

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

# Standard library
import abc
import logging
import subprocess
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, Union

logger = logging.getLogger(__name__)

# progcat internal
from progcat.catalog.errors import FlashFailed


class BoardProfile(NamedTuple):
    """avrdude settings for one board."""

    part: str
    programmer: str
    baud: int


BOARDS: Dict[str, BoardProfile] = {
    'uno': BoardProfile('atmega328p', 'arduino', 115200),
    'nano': BoardProfile('atmega328p', 'arduino', 57600),
    'nano-new': BoardProfile('atmega328p', 'arduino', 115200),
    'pro-mini': BoardProfile('atmega328p', 'arduino', 57600),
    'duemilanove168': BoardProfile('atmega168', 'arduino', 19200),
    'mega': BoardProfile('atmega2560', 'wiring', 115200),
    'adk': BoardProfile('atmega2560', 'wiring', 115200),
    'leonardo': BoardProfile('atmega32u4', 'avr109', 57600),
    'micro': BoardProfile('atmega32u4', 'avr109', 57600),
    'yun': BoardProfile('atmega32u4', 'avr109', 57600),
    'lilypad-usb': BoardProfile('atmega32u4', 'avr109', 57600),
}


class Flasher(abc.ABC):
    """Flashing capability: ``flash(binary_path, board)``.

    Implementations raise FlashFailed on any error.
    """

    @abc.abstractmethod
    def flash(self, binary_path: Union[str, Path], board: str) -> None:
        ...


class AvrdudeFlasher(Flasher):
    """Flashes Intel HEX programs with avrdude.

    Parameters
    ----------
    port : Optional[str]
        Serial port of the board (``/dev/ttyACM0``, ``COM3``). avrdude's
        default is used when None.
    executable : str
        avrdude executable name or path.
    timeout : float
        Seconds to wait for avrdude to finish.
    """

    def __init__(
        self,
        port: Optional[str] = None,
        executable: str = "avrdude",
        timeout: float = 120.0,
    ) -> None:
        self._port = port
        self._executable = executable
        self._timeout = timeout

    def command(self, binary_path: Union[str, Path], board: str) -> List[str]:
        """Build the avrdude command line for ``board``."""
        profile = BOARDS.get(board)
        if profile is None:
            raise FlashFailed(f"unknown board: {board}")
        cmd = [
            self._executable,
            '-p', profile.part,
            '-c', profile.programmer,
            '-b', str(profile.baud),
            '-D',
        ]
        if self._port:
            cmd.extend(['-P', self._port])
        cmd.extend(['-U', f"flash:w:{binary_path}:i"])
        return cmd

    def flash(self, binary_path: Union[str, Path], board: str) -> None:
        cmd = self.command(binary_path, board)
        logger.info("Flashing %s onto %s (cmd=%s)", binary_path, board, ' '.join(cmd))
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=self._timeout
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise FlashFailed(f"{self._executable} failed: {e}") from e

        if result.returncode != 0:
            message = (result.stderr or result.stdout).strip().splitlines()
            raise FlashFailed(message[-1] if message else f"exit status {result.returncode}")
