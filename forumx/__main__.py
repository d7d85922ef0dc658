"""Run the API with uvicorn: ``python -m forumx``."""

import uvicorn

from forumx.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "forumx.main:app",
        host=settings.api_host,
        port=settings.api_port,
        workers=settings.api_workers,
        reload=settings.api_reload and settings.is_development,
    )


if __name__ == "__main__":
    main()
