"""IssueTrac CLI entry point"""

import argparse
import os

import uvicorn

from issuetrac.config import PROJECT_DIR, get_project_config, save_project_config


def init_project():
    """Initialize .issuetrac directory and configuration"""
    PROJECT_DIR.mkdir(exist_ok=True)
    save_project_config(get_project_config())
    print(f"Initialized issuetrac in {PROJECT_DIR.absolute()}")


def serve(host: str = "127.0.0.1", port: int = 8080, reload: bool = False):
    """Start the issuetrac server"""
    if reload:
        os.environ.setdefault("ISSUETRAC_ENV", "development")

    uvicorn.run(
        "issuetrac.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="IssueTrac - issue tracker with archival")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Init command
    subparsers.add_parser("init", help="Initialize issuetrac in current directory")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Start issuetrac server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    return parser


def main(argv=None):
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "init":
        init_project()
    elif args.command == "serve":
        serve(args.host, args.port, args.reload)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
