#!/usr/bin/env python
"""
Command line entry point: serve the API with uvicorn
"""
import logging
import sys

from .config import config


def run():
    """Start the API server on config.PORT"""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger = logging.getLogger(__name__)
    logger.info(f"Starting Film Distribution API on port {config.PORT}")
    logger.info(f"Health check endpoint: http://0.0.0.0:{config.PORT}/api/health")

    try:
        uvicorn.run(
            "film_distribution.api_server:app",
            host="0.0.0.0",
            port=config.PORT,
            log_config=None,
            access_log=True,
        )
    except Exception as e:
        logger.error(f"Failed to start server: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
