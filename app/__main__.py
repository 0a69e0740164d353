"""Run the service with uvicorn: python -m app"""

import uvicorn

from app.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.service_host,
        port=settings.service_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
