"""Per-execution scratch directories under a fixed root."""

import logging
import shutil
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger("playground.workspace")


@dataclass(frozen=True)
class Workspace:
    id: str
    path: Path

    def file(self, name: str) -> Path:
        target = (self.path / name).resolve()
        if target.parent != self.path.resolve():
            raise ValueError(f"invalid workspace file name: {name!r}")
        return target

    def write(self, name: str, text: str) -> Path:
        target = self.file(name)
        target.write_text(text, encoding="utf-8")
        return target


class WorkspaceManager:
    """Hands out uniquely named directories below ``root``.

    The root is created once and never removed. Each workspace is a fresh
    ``run_<uuid>`` directory owned by exactly one execution; ``release``
    deletes it together with everything a toolchain left inside.
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def acquire(self) -> Workspace:
        ws_id = uuid.uuid4().hex
        path = self.root / f"run_{ws_id}"
        path.mkdir()
        return Workspace(id=ws_id, path=path)

    def release(self, workspace: Workspace) -> None:
        try:
            shutil.rmtree(workspace.path)
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning(
                "workspace cleanup failed",
                exc_info=True,
                extra={"workspace": workspace.id},
            )

    @asynccontextmanager
    async def session(self):
        ws = self.acquire()
        try:
            yield ws
        finally:
            self.release(ws)
