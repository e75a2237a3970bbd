import logging
import sys
import time
from typing import Mapping

from playground.core.config import Settings
from playground.sandbox.classify import ExecutionResult
from playground.sandbox.enums import Outcome
from playground.sandbox.runners import (
    CompiledRunner,
    HostEvalRunner,
    InterpretedRunner,
    Runner,
)
from playground.sandbox.workspace import WorkspaceManager

logger = logging.getLogger("playground.gateway")

# rendered by the browser preview, never executed here
PREVIEW_LANGUAGES = ("html", "css")


class ExecutionGateway:
    def __init__(self, runners: Mapping[str, Runner]):
        self.runners = dict(runners)

    def languages(self) -> list[dict]:
        items = [
            {"language": name, "runner": r.kind, "executable": True}
            for name, r in self.runners.items()
        ]
        items += [
            {"language": name, "runner": "preview", "executable": False}
            for name in PREVIEW_LANGUAGES
            if name not in self.runners
        ]
        return items

    async def execute(self, language: str, source: str) -> ExecutionResult:
        start = time.monotonic()
        result = await self._dispatch(language.strip().lower(), source)
        logger.info(
            "execution finished",
            extra={
                "language": language,
                "outcome": result.outcome.value,
                "wall_ms": int((time.monotonic() - start) * 1000),
            },
        )
        return result

    async def _dispatch(self, language: str, source: str) -> ExecutionResult:
        runner = self.runners.get(language)
        if runner is None:
            if language in PREVIEW_LANGUAGES:
                return ExecutionResult(
                    Outcome.unsupported,
                    f"{language} is rendered by the live preview, not executed.",
                )
            return ExecutionResult(
                Outcome.unsupported, f"Language not supported: {language or '(none)'}"
            )
        try:
            return await runner.run(source)
        except Exception:
            logger.exception("runner crashed", extra={"language": language})
            return ExecutionResult(
                Outcome.internal_error, "Internal error while executing code."
            )


def build_gateway(settings: Settings) -> ExecutionGateway:
    workspaces = WorkspaceManager(settings.SCRATCH_ROOT)
    limit = settings.MAX_OUTPUT_CHARS
    return ExecutionGateway(
        {
            "python": InterpretedRunner(
                "python",
                [settings.PYTHON_BIN, "-u"],
                "py",
                workspaces,
                timeout=settings.INTERPRET_TIME_LIMIT_S,
                max_output=limit,
            ),
            "javascript": InterpretedRunner(
                "javascript",
                [settings.NODE_BIN],
                "js",
                workspaces,
                timeout=settings.INTERPRET_TIME_LIMIT_S,
                max_output=limit,
            ),
            "java": CompiledRunner(
                workspaces,
                javac=settings.JAVAC_BIN,
                java=settings.JAVA_BIN,
                release=settings.JAVA_RELEASE,
                default_entry=settings.DEFAULT_ENTRY_POINT,
                compile_timeout=settings.COMPILE_TIME_LIMIT_S,
                run_timeout=settings.RUN_TIME_LIMIT_S,
                max_output=limit,
            ),
            "python-inline": HostEvalRunner(
                workspaces,
                python=sys.executable,
                timeout=settings.INTERPRET_TIME_LIMIT_S,
                max_output=limit,
            ),
        }
    )
