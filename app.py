import logging
import os
import socket

from map_exporter.ui.dash_app import create_dash_app
from map_exporter.logging_config import configure_logging

configure_logging()
logger = logging.getLogger("map_exporter.app")

app = create_dash_app(os.getenv("MAP_EXPORTER_CONFIG", "config"))
server = app.server


def find_free_port(start_port: int, attempts: int = 100) -> int:
    """First port in [start_port, start_port + attempts) nothing listens on."""
    for port in range(start_port, start_port + attempts):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            if s.connect_ex(("localhost", port)) != 0:
                return port
    # all busy: let app.run report the bind error
    return start_port


if __name__ == "__main__":
    preferred_port = int(os.getenv("PORT", "8050"))
    port = find_free_port(preferred_port)

    if port != preferred_port:
        logger.warning("Port is busy, using the next free one", extra={"requested": preferred_port, "port": port})

    app.run(
        host=os.getenv("MAP_EXPORTER_HOST", "0.0.0.0"),
        port=port,
        debug=os.getenv("DEBUG", "0") == "1",
    )
