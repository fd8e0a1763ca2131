"""
cashcard_service.api.__main__

Entrypoint for running the service via `python -m cashcard_service.api` or the
`cashcard-service` console script.
"""

from __future__ import annotations

import uvicorn

from cashcard_service.api.app import create_app
from cashcard_service.observability.logging import get_logger
from cashcard_service.settings import get_settings

log = get_logger(__name__)


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)
    if settings.env == "prod" and settings.seed_test_users:
        log.warning("seeded_test_users_in_prod", users=["sarah1", "kumar2", "hank-owns-no-cards"])

    log.info("serving", host=settings.api_host, port=settings.api_port, env=settings.env)
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
        # RequestContextMiddleware already writes one line per request.
        access_log=False,
    )


if __name__ == "__main__":
    main()
