"""Entry point for running the checkout service."""

import uvicorn

from kmEvents_checkout.shared.core.settings import get_settings


def main() -> None:
    """Run the FastAPI application."""
    settings = get_settings()
    uvicorn.run(
        "kmEvents_checkout.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
