"""Command-line entry point: ``python -m dirshare [DIRECTORY]``."""

from __future__ import annotations

import argparse

from dirshare.config import Settings


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="dirshare",
        description="Browse and download a local directory tree over HTTP.",
    )
    parser.add_argument("directory", nargs="?", help="directory to share (default: current directory)")
    parser.add_argument("--host", help="bind address")
    parser.add_argument("--port", type=int, help="bind port")
    parser.add_argument("--log-level", help="logging level, e.g. DEBUG")
    args = parser.parse_args(argv)

    overrides = {
        "root_dir": args.directory,
        "host": args.host,
        "port": args.port,
        "log_level": args.log_level,
    }
    settings = Settings(**{k: v for k, v in overrides.items() if v is not None})

    import uvicorn

    from dirshare.main import create_app

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
