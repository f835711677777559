"""Run the API with uvicorn: ``python -m todolist_api``."""

import uvicorn

from todolist_api.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "todolist_api.main:app",
        host=settings.app_host,
        port=settings.app_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
