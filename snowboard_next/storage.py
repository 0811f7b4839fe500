from __future__ import annotations

import os
import tempfile
from pathlib import Path

from .logging import get_logger
from .schemas import ReportArtifact

logger = get_logger(__name__)


class ArtifactWriteError(RuntimeError):
    """The output artifact could not be written. This is the only fatal run error."""


class ArtifactStore:
    """Writes the run's JSON artifact, replacing any previous one wholesale."""

    def __init__(self, path: Path | str = Path("data.json")) -> None:
        self.path = Path(path)

    def write(self, artifact: ReportArtifact) -> Path:
        payload = artifact.to_json()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Write beside the target, then swap in, so readers never see a partial file.
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise ArtifactWriteError(f"could not write {self.path}: {exc}") from exc

        logger.info("artifact.written", path=str(self.path), bytes=len(payload.encode("utf-8")))
        return self.path

    def read(self) -> ReportArtifact:
        return ReportArtifact.model_validate_json(self.path.read_text(encoding="utf-8"))
