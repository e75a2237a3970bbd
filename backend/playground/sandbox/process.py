import asyncio
import os
import signal
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence


@dataclass(slots=True)
class ProcessResult:
    stdout: str
    stderr: str
    returncode: int | None
    timed_out: bool = False


def _decode(data: bytes | None, limit: int, marker: bool = True) -> str:
    text = (data or b"").decode("utf-8", errors="replace")
    if len(text) <= limit:
        return text
    # cut on a line boundary so noise patterns still see whole lines
    cut = text.rfind("\n", 0, limit + 1)
    text = text[: cut + 1] if cut >= 0 else text[:limit]
    return text + "... output truncated ...\n" if marker else text


def _kill_group(proc: asyncio.subprocess.Process) -> None:
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass


async def invoke(
    command: Sequence[str],
    *,
    cwd: Path | None,
    timeout: float,
    stdin: str | None = None,
    max_output: int = 64 * 1024,
) -> ProcessResult:
    """Run one toolchain command and wait for it at most ``timeout`` seconds.

    The child gets its own session so a deadline kills the whole tree it
    spawned. Output captured before a kill is dropped. Launch failures
    (missing binary, permissions) propagate as ``OSError``.
    """
    proc = await asyncio.create_subprocess_exec(
        *command,
        cwd=str(cwd) if cwd else None,
        stdin=asyncio.subprocess.PIPE if stdin is not None else asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        start_new_session=True,
    )
    payload = stdin.encode("utf-8") if stdin is not None else None
    try:
        out, err = await asyncio.wait_for(proc.communicate(payload), timeout=timeout)
    except asyncio.TimeoutError:
        _kill_group(proc)
        await proc.wait()
        return ProcessResult(stdout="", stderr="", returncode=proc.returncode, timed_out=True)
    except asyncio.CancelledError:
        _kill_group(proc)
        await asyncio.shield(proc.wait())
        raise
    return ProcessResult(
        stdout=_decode(out, max_output),
        stderr=_decode(err, max_output, marker=False),
        returncode=proc.returncode,
    )
