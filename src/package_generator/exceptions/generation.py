"""Generation exceptions: failures while writing packages to disk."""

from pathlib import Path

from .base import PackageGeneratorError


class GenerationError(PackageGeneratorError):
    """Raised when a generated file or directory cannot be written."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Cannot write {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason
