"""Shell command executor — the only place that spawns processes."""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Awaitable, Callable

logger = logging.getLogger("wlanwatch.executor")

# iw reports EBUSY as -16, which the shell surfaces as exit status 240
BUSY_RETURN_CODES = (-16, 240)

_ANSI_RE = re.compile(
    r"\x1b"
    r"(?:"
    r"\[[0-9;?<>=]*[A-Za-z~]"
    r"|\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\([A-Za-z]"
    r"|[=>NOM78DHE]"
    r")"
)


@dataclass
class CommandResult:
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0


Executor = Callable[..., Awaitable[CommandResult]]


def _strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def is_busy(result: CommandResult) -> bool:
    """True when the scan was refused because the device was busy."""
    if result.returncode in BUSY_RETURN_CODES:
        return True
    return "(-16)" in result.stderr


async def run_shell(command: str, timeout: float = 30) -> CommandResult:
    """Run a shell command string and return its output.

    Never raises for process failures: timeouts and spawn errors come back
    as ``returncode == -1`` with the reason in ``stderr``. Cancelling the
    awaiting task kills the child process.
    """
    logger.debug(f"exec: {command}")
    try:
        proc = await asyncio.create_subprocess_shell(
            command,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        return CommandResult("", str(e), -1)

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        _kill(proc)
        return CommandResult("", "Timeout", -1)
    except asyncio.CancelledError:
        _kill(proc)
        raise

    return CommandResult(
        _strip_ansi(stdout.decode("utf-8", errors="replace")),
        _strip_ansi(stderr.decode("utf-8", errors="replace")),
        proc.returncode or 0,
    )


def _kill(proc: asyncio.subprocess.Process) -> None:
    try:
        proc.kill()
    except ProcessLookupError:
        pass
