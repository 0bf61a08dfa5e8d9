"""Run the API with uvicorn: ``python -m hoteltrek``."""
import errno
import logging
import socket
import sys

import uvicorn

from hoteltrek.config import settings

logger = logging.getLogger("hoteltrek")


def port_in_use(host: str, port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError as e:
            if e.errno == errno.EADDRINUSE:
                return True
            raise
    return False


def main() -> int:
    if port_in_use(settings.host, settings.port):
        logging.basicConfig(level=logging.INFO)
        logger.info("Port %s is already in use. Server might be already running.", settings.port)
        return 0
    # uvicorn handles SIGINT/SIGTERM with a graceful shutdown
    uvicorn.run(
        "hoteltrek.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
