"""Run the TrainerDesk API server.

Usage:
    trainerdesk-api
    trainerdesk-api --host 0.0.0.0 --port 8000 --reload
"""

import argparse

import uvicorn

from trainerdesk.config.settings import get_settings


def main() -> None:
    """Run the API under uvicorn."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Run the TrainerDesk API server")
    parser.add_argument(
        "--host",
        default=settings.API_HOST,
        help=f"Host to bind to (default: {settings.API_HOST})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.API_PORT,
        help=f"Port to bind to (default: {settings.API_PORT})",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    args = parser.parse_args()

    # Logging is configured by the app lifespan, so uvicorn's own config is skipped
    uvicorn.run(
        "trainerdesk.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
        proxy_headers=True,
    )


if __name__ == "__main__":
    main()
