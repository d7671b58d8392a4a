"""
translate-shell Engine Invoker: runs the ``trans`` command line program.

Each invocation spawns ``trans -e <engine> -b :<lang> <word>`` and reads the
translation from stdout. ``trans -S`` lists the engines the binary supports.
"""

import asyncio
import logging
from typing import List, Optional, Tuple

from ..exceptions import EngineDiscoveryError, EngineFailure
from .base import EngineInvoker

logger = logging.getLogger(__name__)


def parse_engine_listing(listing: str) -> List[str]:
    """
    Parse ``trans -S`` output into engine ids.

    Tokens are whitespace separated; blank tokens and ``*`` markers are
    dropped.
    """
    engines: List[str] = []
    for token in listing.split():
        token = token.strip()
        if token and not token.startswith("*"):
            engines.append(token)
    return engines


class TransShellInvoker(EngineInvoker):
    """
    Engine invoker backed by the translate-shell binary.

    Usage:
        invoker = TransShellInvoker("/usr/bin/trans", timeout=30.0)
        text = await invoker.invoke("google", "es", "hello")
    """

    def __init__(self, binary: str = "/usr/bin/trans", timeout: Optional[float] = 30.0):
        self.binary = binary
        self.timeout = timeout

    async def invoke(self, engine_id: str, language: str, word: str) -> str:
        if word.startswith("-"):
            # trans would read it as one of its own options
            raise EngineFailure(engine_id, f"refusing option-like word {word!r}")
        try:
            stdout, _ = await self._run("-e", engine_id, "-b", f":{language}", word)
        except asyncio.TimeoutError as e:
            raise EngineFailure(engine_id, f"timed out after {self.timeout}s") from e
        except OSError as e:
            raise EngineFailure(engine_id, f"could not start {self.binary}: {e}") from e

        if not stdout:
            raise EngineFailure(engine_id, "empty output")
        try:
            text = stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EngineFailure(engine_id, f"output is not valid UTF-8: {e}") from e

        text = text.strip()
        if not text:
            raise EngineFailure(engine_id, "empty output")
        return text

    async def list_engines(self) -> list:
        try:
            stdout, _ = await self._run("-S")
        except (OSError, asyncio.TimeoutError) as e:
            raise EngineDiscoveryError(f"could not list engines with {self.binary} -S: {e!r}") from e
        try:
            listing = stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EngineDiscoveryError(f"engine listing is not valid UTF-8: {e}") from e
        return parse_engine_listing(listing)

    async def _run(self, *args: str) -> Tuple[bytes, bytes]:
        """Run the binary and collect its output, killing it on timeout or cancellation."""
        proc = await asyncio.create_subprocess_exec(
            self.binary, *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except BaseException:
            await _kill(proc)
            raise

        if proc.returncode:
            logger.debug(
                "%s %s exited with %s: %s",
                self.binary, " ".join(args), proc.returncode,
                stderr.decode("utf-8", errors="replace").strip(),
            )
        return stdout, stderr


async def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is not None:
        return
    try:
        proc.kill()
    except ProcessLookupError:
        return
    await proc.wait()
