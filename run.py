#!/usr/bin/env python3
"""
Launcher for the trip planner API.

    python run.py --env production --port 8787
    python run.py --list-envs
"""

import os
import sys
import argparse
from typing import List, Optional

from trip_planner.config.loader import ConfigLoader, load_config_for_environment
from trip_planner.config.settings import Environment, Settings

APP_TARGET = "trip_planner.main:app"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Trip Planner API Server")

    server = parser.add_argument_group("server")
    server.add_argument(
        "--env",
        choices=[env.value for env in Environment],
        help="Environment to run (default: $ENVIRONMENT or development)",
    )
    server.add_argument("--host", help="Bind address (overrides HOST)")
    server.add_argument("--port", type=int, help="Bind port (overrides PORT)")
    server.add_argument("--workers", type=int, help="Worker processes (overrides WORKERS)")
    server.add_argument("--reload", action="store_true", help="Reload on code changes")
    server.add_argument("--debug", action="store_true", help="Debug mode, also serves the API docs")

    config = parser.add_argument_group("configuration")
    config.add_argument("--list-envs", action="store_true", help="List .env.<environment> files present")
    config.add_argument("--validate-env", metavar="ENV", help="Check one environment's configuration")
    config.add_argument("--create-sample", metavar="ENV", help="Write .env.<ENV>.sample")
    return parser


def run_config_command(args: argparse.Namespace) -> Optional[int]:
    """
    Handle the configuration commands.

    Returns:
        Exit code when a command ran, ``None`` when the server should start
    """
    if args.list_envs:
        envs = ConfigLoader.get_available_environments()
        print("Available environment configurations:")
        for env in envs:
            print(f"  - {env}")
        return 0

    if args.validate_env:
        if ConfigLoader.validate_environment_config(args.validate_env):
            print(f"{args.validate_env}: valid")
            return 0
        print(f"{args.validate_env}: invalid or missing")
        return 1

    if args.create_sample:
        try:
            print(f"Wrote {ConfigLoader.create_sample_env_file(args.create_sample)}")
        except (OSError, ValueError) as e:
            print(f"Could not write sample for {args.create_sample}: {e}")
            return 1
        return 0

    return None


def resolve_settings(args: argparse.Namespace) -> Settings:
    """
    Settings for the chosen environment with command line overrides applied.

    Uvicorn imports the app module in its own process, so the environment
    choice is exported before the app is imported.
    """
    if args.env:
        os.environ["ENVIRONMENT"] = args.env
    if args.debug:
        os.environ["DEBUG"] = "true"

    settings = load_config_for_environment(args.env)
    overrides = {
        name: value
        for name, value in (
            ("host", args.host),
            ("port", args.port),
            ("workers", args.workers),
            ("reload", args.reload or None),
            ("debug", args.debug or None),
        )
        if value is not None
    }
    return settings.model_copy(update=overrides) if overrides else settings


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    exit_code = run_config_command(args)
    if exit_code is not None:
        return exit_code

    try:
        settings = resolve_settings(args)
    except ValueError as e:
        print(f"Failed to load configuration: {e}")
        return 1

    if settings.is_production() and not settings.security.app_password:
        print("SECURITY_APP_PASSWORD must be set in production")
        return 1

    print(
        f"Starting {settings.app_name} v{settings.app_version} "
        f"({settings.environment.value}) on {settings.host}:{settings.port}, "
        f"database {settings.database.url}"
    )

    import uvicorn

    uvicorn.run(
        APP_TARGET,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        workers=1 if settings.reload else settings.workers,
        log_level=settings.log_level.value.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
