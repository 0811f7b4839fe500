from __future__ import annotations

import sys

from snowboard_next.config import app_config
from snowboard_next.logging import get_logger, setup_logging
from snowboard_next.pipeline import run
from snowboard_next.storage import ArtifactWriteError


def main() -> int:
    setup_logging(app_config.logging)
    logger = get_logger("snowboard_next")
    try:
        run(app_config)
    except ArtifactWriteError as exc:
        logger.error("run.fatal", error=str(exc))
        return 1
    print(f"Wrote {app_config.output.path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
