"""Run the telemetry server: ``python -m server [host] [port]``."""

import logging
import sys

import uvicorn

_DEFAULT_HOST = "0.0.0.0"
_DEFAULT_PORT = 8000


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def main() -> None:
    _configure_logging()
    host = sys.argv[1] if len(sys.argv) > 1 else _DEFAULT_HOST
    port = int(sys.argv[2]) if len(sys.argv) > 2 else _DEFAULT_PORT
    uvicorn.run("server.main:app", host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
