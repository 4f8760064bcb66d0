#!/usr/bin/env python3
"""Starts the billing admin API under uvicorn."""
import logging
import os

import uvicorn

from billing_admin.core.config import settings
from billing_admin.core.logging import setup_logging

setup_logging()
logger = logging.getLogger("run_server")


def tls_options() -> dict:
    """Key/cert pair for uvicorn, or nothing when either file is missing."""
    missing = [
        path for path in (settings.SSL_KEYFILE, settings.SSL_CERTFILE)
        if not path or not os.path.exists(path)
    ]
    if missing:
        logger.warning("TLS disabled, missing key/cert: %s", ", ".join(str(p) for p in missing))
        return {}
    return {"ssl_keyfile": settings.SSL_KEYFILE, "ssl_certfile": settings.SSL_CERTFILE}


def server_options() -> dict:
    options = {
        "host": settings.HOST,
        "port": settings.PORT,
        # Auto-reload only while developing
        "reload": settings.ENVIRONMENT == "development",
        "log_level": settings.LOG_LEVEL.lower(),
    }
    options.update(tls_options())
    return options


def main() -> None:
    options = server_options()
    scheme = "https" if "ssl_certfile" in options else "http"
    logger.info(
        "%s %s (%s) listening on %s://%s:%s",
        settings.PROJECT_NAME,
        settings.PROJECT_VERSION,
        settings.ENVIRONMENT,
        scheme,
        options["host"],
        options["port"],
    )
    uvicorn.run("billing_admin.main:app", **options)


if __name__ == "__main__":
    main()
