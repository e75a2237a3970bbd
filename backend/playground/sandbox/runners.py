import json
import logging
import re
import sys
from pathlib import Path
from typing import Protocol, Sequence

from playground.sandbox import host_worker
from playground.sandbox.classify import ExecutionResult, classify
from playground.sandbox.enums import Outcome, Phase
from playground.sandbox.noise import noise_for
from playground.sandbox.process import invoke
from playground.sandbox.workspace import WorkspaceManager

logger = logging.getLogger("playground.runners")

# "public class Foo" decides the file name javac insists on. Nothing more is
# parsed; sources without it fall back to the default entry point.
PUBLIC_CLASS = re.compile(r"\bpublic\s+(?:(?:final|abstract|strictfp)\s+)*class\s+([A-Za-z_$][\w$]*)")


def entry_point_name(source: str, default: str = "Main") -> str:
    m = PUBLIC_CLASS.search(source)
    return m.group(1) if m else default


def _internal(exc: OSError, what: str) -> ExecutionResult:
    logger.error("%s failed: %s", what, exc)
    return ExecutionResult(Outcome.internal_error, f"{what} failed: {exc}")


class Runner(Protocol):
    kind: str

    async def run(self, source: str) -> ExecutionResult: ...


class InterpretedRunner:
    """Write the source to one file and hand it to a standalone interpreter."""

    kind = "interpreted"

    def __init__(
        self,
        language: str,
        command: Sequence[str],
        extension: str,
        workspaces: WorkspaceManager,
        timeout: float = 5,
        max_output: int = 64 * 1024,
    ):
        self.language = language
        self.command = list(command)
        self.extension = extension
        self.workspaces = workspaces
        self.timeout = timeout
        self.max_output = max_output

    async def run(self, source: str) -> ExecutionResult:
        try:
            async with self.workspaces.session() as ws:
                script = ws.write(f"main.{self.extension}", source)
                res = await invoke(
                    [*self.command, script.name],
                    cwd=ws.path,
                    timeout=self.timeout,
                    max_output=self.max_output,
                )
        except OSError as exc:
            return _internal(exc, f"{self.language} interpreter")
        return classify(
            res.stdout,
            res.stderr,
            res.returncode,
            res.timed_out,
            Phase.run,
            noise_for(self.language, Phase.run.value),
        )


class CompiledRunner:
    """Compile ``<Entry>.java`` inside a workspace, then run the entry class."""

    kind = "compiled"

    def __init__(
        self,
        workspaces: WorkspaceManager,
        javac: str = "javac",
        java: str = "java",
        release: int | None = None,
        default_entry: str = "Main",
        compile_timeout: float = 10,
        run_timeout: float = 5,
        max_output: int = 64 * 1024,
        language: str = "java",
    ):
        self.workspaces = workspaces
        self.javac = javac
        self.java = java
        self.release = release
        self.default_entry = default_entry
        self.compile_timeout = compile_timeout
        self.run_timeout = run_timeout
        self.max_output = max_output
        self.language = language

    def compile_command(self, filename: str) -> list[str]:
        cmd = [self.javac, "-encoding", "UTF-8"]
        if self.release:
            cmd += ["--release", str(self.release)]
        return cmd + [filename]

    async def run(self, source: str) -> ExecutionResult:
        entry = entry_point_name(source, self.default_entry)
        try:
            async with self.workspaces.session() as ws:
                src = ws.write(f"{entry}.java", source)
                compiled = await invoke(
                    self.compile_command(src.name),
                    cwd=ws.path,
                    timeout=self.compile_timeout,
                    max_output=self.max_output,
                )
                result = classify(
                    compiled.stdout,
                    compiled.stderr,
                    compiled.returncode,
                    compiled.timed_out,
                    Phase.compile,
                    noise_for(self.language, Phase.compile.value),
                )
                if not result.ok:
                    return result
                ran = await invoke(
                    [self.java, "-cp", str(ws.path), entry],
                    cwd=ws.path,
                    timeout=self.run_timeout,
                    max_output=self.max_output,
                )
        except OSError as exc:
            return _internal(exc, f"{self.language} toolchain")
        return classify(
            ran.stdout,
            ran.stderr,
            ran.returncode,
            ran.timed_out,
            Phase.run,
            noise_for(self.language, Phase.run.value),
        )


def _find_report(stdout: str) -> dict | None:
    # atexit hooks in user code may print after the report line
    for line in reversed(stdout.splitlines()):
        try:
            report = json.loads(line)
        except ValueError:
            continue
        if isinstance(report, dict) and "status" in report:
            return report
    return None


class HostEvalRunner:
    """Evaluate Python in a fresh namespace inside a throwaway interpreter.

    No source file is written; the code travels over stdin to
    ``host_worker``. The worker still runs inside a workspace so that files
    the snippet creates are removed afterwards.
    """

    kind = "host-eval"

    def __init__(
        self,
        workspaces: WorkspaceManager,
        python: str = sys.executable,
        timeout: float = 5,
        max_output: int = 64 * 1024,
    ):
        self.workspaces = workspaces
        self.python = python
        self.timeout = timeout
        self.max_output = max_output

    async def run(self, source: str) -> ExecutionResult:
        worker = Path(host_worker.__file__).resolve()
        try:
            async with self.workspaces.session() as ws:
                res = await invoke(
                    [self.python, "-I", str(worker)],
                    cwd=ws.path,
                    timeout=self.timeout,
                    stdin=json.dumps({"source": source}),
                    max_output=self.max_output * 2,
                )
        except OSError as exc:
            return _internal(exc, "host evaluation")
        if res.timed_out:
            return classify("", "", None, True)
        report = _find_report(res.stdout)
        if report is None:
            # the snippet ended the worker before it could report
            return classify(
                res.stdout[: self.max_output],
                res.stderr[: self.max_output],
                res.returncode,
                False,
            )
        return classify(
            report.get("stdout", "")[: self.max_output],
            report.get("stderr", "")[: self.max_output],
            0 if report.get("status") == "succeeded" else 1,
            False,
        )
