"""
Server command line: environment utilities and uvicorn startup.

Overrides are exported as environment variables before the settings are
reloaded, so the application uvicorn imports (and any reload or worker
subprocess) is built from the same configuration that was validated here.
"""

import argparse
import os
import sys
from typing import Dict, List, Optional

from tourhub.config.loader import ConfigLoader
from tourhub.config.settings import Environment, Settings, reload_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TourHub Favorites API server")
    parser.add_argument(
        "--env",
        choices=[env.value for env in Environment],
        default=None,
        help="Environment to run (default: from ENVIRONMENT env var or development)"
    )
    parser.add_argument("--host", default=None, help="Host to bind to (overrides config)")
    parser.add_argument("--port", type=int, default=None, help="Port to bind to (overrides config)")
    parser.add_argument("--workers", type=int, default=None, help="Number of worker processes (overrides config)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload (overrides config)")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode (overrides config)")
    parser.add_argument("--list-envs", action="store_true", help="List available environment configurations")
    parser.add_argument("--validate-env", help="Validate a specific environment configuration")
    parser.add_argument("--create-sample", help="Create a sample .env file for the specified environment")
    return parser


def cli_overrides(args: argparse.Namespace) -> Dict[str, str]:
    """Environment variables equivalent to the command line overrides."""
    overrides = {
        "ENVIRONMENT": args.env,
        "HOST": args.host,
        "PORT": args.port,
        "WORKERS": args.workers,
        "RELOAD": "true" if args.reload else None,
        "DEBUG": "true" if args.debug else None,
    }
    return {key: str(value) for key, value in overrides.items() if value is not None}


def load_settings(args: argparse.Namespace) -> Settings:
    """Export the overrides and rebuild the global settings from them."""
    os.environ.update(cli_overrides(args))
    return reload_settings()


def _run_utility(args: argparse.Namespace) -> Optional[int]:
    if args.list_envs:
        print("Available environment configurations:")
        for env in ConfigLoader.get_available_environments():
            print(f"  - {env}")
        return 0

    if args.validate_env:
        if ConfigLoader.validate_environment_config(args.validate_env):
            print(f"✓ Environment '{args.validate_env}' configuration is valid")
            return 0
        print(f"✗ Environment '{args.validate_env}' configuration is invalid or missing")
        return 1

    if args.create_sample:
        try:
            sample_file = ConfigLoader.create_sample_env_file(args.create_sample)
        except (ValueError, OSError) as e:
            print(f"✗ Failed to create sample configuration: {e}")
            return 1
        print(f"✓ Sample configuration created: {sample_file}")
        return 0

    return None


def main(argv: Optional[List[str]] = None) -> int:
    """Main startup function with environment configuration"""
    args = build_parser().parse_args(argv)

    status = _run_utility(args)
    if status is not None:
        return status

    try:
        settings = load_settings(args)
    except ValueError as e:
        print(f"✗ Failed to load configuration: {e}")
        return 1

    problems = ConfigLoader.find_config_problems(settings)
    if problems:
        print(f"✗ Invalid configuration for environment: {settings.environment.value}")
        for problem in problems:
            print(f"   - {problem}")
        return 1

    print(f"🚀 Starting {settings.app_name} v{settings.app_version}")
    print(f"   Environment: {settings.environment.value}")
    print(f"   Listening: http://{settings.host}:{settings.port} (GraphQL at /graphql)")
    print(f"   Workers: {settings.workers}, reload: {settings.reload}, debug: {settings.debug}")
    print(f"   Log Level: {settings.log_level.value}")

    import uvicorn

    uvicorn.run(
        "tourhub.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        workers=settings.workers if not settings.reload else 1,
        log_level=settings.log_level.value.lower(),
        access_log=True,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
