# localmedia/__main__.py
import errno
import logging
import socket
import sys

import uvicorn

from .config import get_settings
from .main import create_app

log = logging.getLogger("localmedia")


def bind_socket(host, port):
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    return sock


def main():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        sock = bind_socket(settings.host, settings.port)
    except OSError as e:
        if e.errno == errno.EADDRINUSE:
            log.error(
                "Port %s is already in use. Stop the process using that port and restart the server.",
                settings.port,
            )
        else:
            log.error("Server error: %s", e)
        return 1

    app = create_app(settings)
    server = uvicorn.Server(uvicorn.Config(app, log_config=None))
    log.info("Local image server running on http://localhost:%s", settings.port)
    server.run(sockets=[sock])
    return 0


if __name__ == "__main__":
    sys.exit(main())
