#!/usr/bin/env python3
"""
Serve the Blood Donation API with uvicorn.

DEBUG=true runs a single auto-reloading process; otherwise WORKERS
processes are started.
"""
import uvicorn
import sys
from app.core.config import settings
from app.core.logging import logger

def main():
    options = {
        "host": settings.HOST,
        "port": settings.PORT,
        "log_level": settings.LOG_LEVEL.lower(),
        "use_colors": settings.DEBUG,
    }
    if settings.DEBUG:
        options["reload"] = True
    else:
        options["workers"] = settings.WORKERS

    logger.info(
        f"Serving {settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENVIRONMENT}) "
        f"on {settings.HOST}:{settings.PORT}"
    )

    try:
        uvicorn.run("app.main:app", **options)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
