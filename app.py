import logging
import os
import socket

from oos_browser.logging_config import configure_logging
from oos_browser.ui.dash_app import create_dash_app

configure_logging()
logger = logging.getLogger("oos_browser.app")

CONFIG_ROOT = os.getenv("OOS_BROWSER_CONFIG", "config")

app = create_dash_app(CONFIG_ROOT)
server = app.server


def port_in_use(port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        return sock.connect_ex(("localhost", port)) == 0


def pick_port(preferred: int, attempts: int = 100) -> int:
    """First free port in [preferred, preferred + attempts); falls back to preferred."""
    for port in range(preferred, preferred + attempts):
        if not port_in_use(port):
            return port
    return preferred


def main() -> None:
    preferred = int(os.getenv("PORT", "8050"))
    port = pick_port(preferred)
    if port != preferred:
        logger.warning("Port taken, using next free port", extra={"requested": preferred, "port": port})

    debug = os.getenv("DEBUG", "0") == "1"
    logger.info("Starting dashboard", extra={"port": port, "debug": debug, "config_root": CONFIG_ROOT})
    app.run(host="0.0.0.0", port=port, debug=debug)


if __name__ == "__main__":
    main()
