"""Entry point for the headless CMS API.

Starts the FastAPI application under Uvicorn.  Configuration such as
ADMIN_PASSWORD, DATABASE_URL, HOST and PORT is read from the
environment (see ``headless_cms_api/app/core/config.py``).

Usage:
    ADMIN_PASSWORD=secret python run.py
"""
from uvicorn import Config, Server

from headless_cms_api.app.core.config import settings
from headless_cms_api.app.main import app


def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    Server(config).run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
