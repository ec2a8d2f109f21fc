"""``memberportal-server``: run the API under uvicorn."""

import argparse
import os


def build_parser() -> argparse.ArgumentParser:
    from memberportal.config import settings

    parser = argparse.ArgumentParser(prog="memberportal-server", description="Member portal API server")
    parser.add_argument("--host", default=settings.host, help=f"Bind host (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    parser.add_argument("--log-level", default=settings.log_level, choices=["debug", "info", "warning", "error"])
    parser.add_argument("--reload", action="store_true", help="Reload on source changes (development)")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Keep portal users in a local SQLite file instead of PostgreSQL",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    # Settings are read when memberportal.main is imported by uvicorn
    if args.local:
        os.environ["PORTAL_LOCAL_MODE"] = "1"
    os.environ["PORTAL_LOG_LEVEL"] = args.log_level

    import uvicorn

    uvicorn.run(
        "memberportal.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
