"""File-system access for generated artifacts.

``ArtifactWriter`` is the only component that touches the disk.  It applies
the overwrite policy uniformly: without ``force`` an existing file is left
byte-identical and reported as skipped; with ``force`` it is replaced.
Every ``OSError`` is re-raised as ``FilesystemError`` naming the path.
"""

from __future__ import annotations

from pathlib import Path

from .models import GeneratedArtifact, WriteOutcome


class FilesystemError(OSError):
    """Raised when reading, writing or creating a path fails."""

    def __init__(self, path: Path, action: str, cause: OSError) -> None:
        self.path = path
        self.action = action
        super().__init__(f"Could not {action} {path}: {cause.strerror or cause}")


class ArtifactWriter:
    """Reads and writes files below an application root."""

    def __init__(self, base_path: str | Path, *, force: bool = False) -> None:
        self.base_path = Path(base_path)
        self.force = force

    def resolve(self, relative_path: str) -> Path:
        return self.base_path / relative_path

    # -- Queries -----------------------------------------------------------

    def exists(self, relative_path: str) -> bool:
        return self.resolve(relative_path).exists()

    def read(self, relative_path: str) -> str:
        path = self.resolve(relative_path)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise FilesystemError(path, "read", exc) from exc

    def glob(self, relative_dir: str, pattern: str) -> list[str]:
        """Return sorted relative paths in *relative_dir* matching *pattern*."""
        directory = self.resolve(relative_dir)
        if not directory.is_dir():
            return []
        return sorted(
            p.relative_to(self.base_path).as_posix() for p in directory.glob(pattern)
        )

    # -- Mutations ---------------------------------------------------------

    def make_directory(self, relative_path: str) -> Path:
        path = self.resolve(relative_path)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(path, "create directory", exc) from exc
        return path

    def write(self, artifact: GeneratedArtifact) -> WriteOutcome:
        """Persist *artifact*, honouring the overwrite policy."""
        path = self.resolve(artifact.relative_path)
        existed = path.exists()
        if existed and not self.force:
            return WriteOutcome.SKIPPED
        self._put(path, artifact.content)
        return WriteOutcome.OVERWRITTEN if existed else WriteOutcome.CREATED

    def put(self, relative_path: str, content: str) -> None:
        """Write *content* unconditionally (used for registration files)."""
        self._put(self.resolve(relative_path), content)

    def append(self, relative_path: str, content: str) -> None:
        path = self.resolve(relative_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("a", encoding="utf-8") as handle:
                handle.write(content)
        except OSError as exc:
            raise FilesystemError(path, "append to", exc) from exc

    # -- Internal ----------------------------------------------------------

    def _put(self, path: Path, content: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise FilesystemError(path, "write", exc) from exc
