import logging
from typing import Optional

import uvicorn

from contentsync.app import app
from contentsync.core.config import Config


def configure_logging(level: Optional[str] = None) -> None:
    """Set up root logging at ``level``, or ``Config.LOG_LEVEL`` when not given."""
    resolved = logging.getLevelName((level or Config.LOG_LEVEL).upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(
        level=resolved,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()],
    )


if __name__ == "__main__":
    configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=8080)
