"""
Purpose:
- `genproxy [--addr host:port]` entry point: configure logging, build the app, serve it with uvicorn.
- No positional arguments are accepted.
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

import uvicorn
from jinja2 import TemplateNotFound

from .core.settings import Settings, get_settings
from .llm.errors import StreamerInitError
from .main import create_app

logger = logging.getLogger(__name__)

def parse_addr(value: str) -> Tuple[str, int]:
    """'host:port' -> (host, port). An empty host (':8080') listens on all interfaces."""
    host, sep, port = value.rpartition(":")
    if not sep or not port.isdigit() or not 0 < int(port) < 65536:
        raise argparse.ArgumentTypeError(f"invalid address {value!r}, expected host:port")
    host = host.strip("[]") or "0.0.0.0"
    return host, int(port)

def initialize_argparser(cfg: Settings) -> argparse.ArgumentParser:
    """Initialize the argument parser for the server."""
    parser = argparse.ArgumentParser(
        prog="genproxy",
        usage="genproxy [options]",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "-addr",
        "--addr",
        help="address to serve",
        default=cfg.addr,
        type=parse_addr,
    )
    return parser

def main(argv: Optional[List[str]] = None) -> int:
    cfg = get_settings()
    parser = initialize_argparser(cfg)
    # unknown options and positional arguments exit with status 2
    args = parser.parse_args(argv)
    # argparse runs string defaults through parse_addr too
    host, port = args.addr

    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        app = create_app(cfg)
    except (StreamerInitError, TemplateNotFound) as e:
        logger.error("Startup failed: %s", e)
        return 1

    logger.info("Serving on http://%s:%d", host, port)
    # uvicorn exits the process itself if the address cannot be bound
    uvicorn.run(app, host=host, port=port, log_level=cfg.log_level.lower())
    return 0

if __name__ == "__main__":
    sys.exit(main())
