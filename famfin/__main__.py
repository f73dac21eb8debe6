"""
Run the FamFin API.
Usage: python -m famfin [--host 127.0.0.1] [--port 1000] [--reload]
"""

import argparse
import logging

import uvicorn

from .config import settings


def main():
    parser = argparse.ArgumentParser(description="Run the FamFin API server.")
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Port (default: {settings.port})")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("famfin.main:app", host=args.host, port=args.port, reload=args.reload,
                log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
