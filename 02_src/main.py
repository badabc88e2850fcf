"""Main entry point for the Absconders Portal."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from portal.api import create_fastapi_app
from portal.app import Application
from portal.config import Settings
from portal.logging_config import setup_logging


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")

    setup_logging()
    settings = Settings.from_env()

    app = create_fastapi_app(Application(settings=settings))

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
