"""IssueTrack CLI entry point"""

import argparse
import logging
import os

import uvicorn

from issuetrack.config import (
    CONFIG_DIR,
    STORAGE_BACKENDS,
    get_log_level,
    get_project_config,
    save_project_config,
)


def configure_logging(level: str = "INFO"):
    """Configure root logging; call once at process startup"""
    logging.basicConfig(
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )


def init_project():
    """Initialize .issuetrack directory and configuration"""
    save_project_config(get_project_config())

    print(f"Initialized issuetrack in {CONFIG_DIR.absolute()}")


def serve(host: str = "127.0.0.1", port: int = 8080, reload: bool = False, storage: str = None):
    """Start the issuetrack server"""
    if storage:
        os.environ["ISSUETRACK_STORAGE"] = storage

    log_level = get_log_level()
    configure_logging(log_level)

    uvicorn.run(
        "issuetrack.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level.lower()
    )


def main(argv=None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(description="IssueTrack - issue tracking API")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Init command
    subparsers.add_parser("init", help="Initialize issuetrack in current directory")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Start issuetrack server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.add_argument("--storage", choices=STORAGE_BACKENDS, help="Override the configured storage backend")

    args = parser.parse_args(argv)

    if args.command == "init":
        init_project()
    elif args.command == "serve":
        serve(args.host, args.port, args.reload, args.storage)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
