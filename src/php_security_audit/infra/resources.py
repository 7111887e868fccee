"""Bundled documents: the audit protocol and the prompt catalog."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.domain.exceptions import StorageError

RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"
DEFAULT_PROTOCOL_FILE = RESOURCES_DIR / "PROTOCOL.md"
DEFAULT_PROMPTS_DIR = RESOURCES_DIR / "prompts"


class ProtocolSource:
    def __init__(self, *, path: Path) -> None:
        self._path = path

    def read(self) -> str | None:
        if not self._path.is_file():
            return None
        try:
            return self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(self._path, "Failed to read protocol") from e


@dataclass(frozen=True)
class PromptEntry:
    name: str
    description: str
    path: Path

    def read(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(self.path, "Failed to read prompt") from e


class PromptCatalog:
    """Every `*.md` file in `prompts_dir` is a prompt named after its stem."""

    def __init__(self, *, prompts_dir: Path) -> None:
        self._prompts_dir = prompts_dir

    def entries(self) -> list[PromptEntry]:
        if not self._prompts_dir.is_dir():
            return []
        return [
            PromptEntry(
                name=fp.stem,
                description=f"Real vulnerability patterns for {fp.stem.replace('-', ' ')}",
                path=fp,
            )
            for fp in sorted(self._prompts_dir.glob("*.md"))
        ]
