"""Async external-command helper"""

from __future__ import annotations

import asyncio
import subprocess
from typing import Sequence


async def command_run(argv: Sequence[str]) -> str:
    """
    Run an external command without interactive input and return its stdout.

    Args:
        argv: Program and arguments

    Returns:
        Decoded stdout text

    Raises:
        FileNotFoundError: If the program is not installed
        OSError: If the program cannot be launched
        subprocess.CalledProcessError: If the program exits nonzero
    """
    process = await asyncio.create_subprocess_exec(
        *argv,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await process.communicate()
    if process.returncode != 0:
        raise subprocess.CalledProcessError(
            process.returncode or 1,
            list(argv),
            output=stdout.decode(errors="replace"),
            stderr=stderr.decode(errors="replace"),
        )
    return stdout.decode(errors="replace")
