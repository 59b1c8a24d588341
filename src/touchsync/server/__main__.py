from __future__ import annotations

import uvicorn

from touchsync.logging_config import setup_logging

from .config import get_settings


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    uvicorn.run("touchsync.server.app:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
