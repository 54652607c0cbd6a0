#!/usr/bin/env python3
"""
Startup script for the Shift Analytics Service
"""
import argparse
import sys

import uvicorn

from src.shift_analytics.config import ConfigValidator, settings
from src.shift_analytics.logging_config import setup_logging


def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description=settings.app_name,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py                     # Run in production mode
  python run.py --dev               # Run in development mode
  python run.py --port 8001         # Run on different port
  python run.py --check             # Check configuration
        """
    )

    parser.add_argument(
        '--dev', '--development',
        action='store_true',
        help='Run in development mode with auto-reload'
    )

    parser.add_argument(
        '--host',
        default=settings.host,
        help=f'Host to bind to (default: {settings.host})'
    )

    parser.add_argument(
        '--port', '-p',
        type=int,
        default=settings.port,
        help=f'Port to listen on (default: {settings.port})'
    )

    parser.add_argument(
        '--workers', '-w',
        type=int,
        default=1,
        help='Number of worker processes'
    )

    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warning', 'error'],
        default='debug' if settings.debug else 'info',
        help='Log level'
    )

    parser.add_argument(
        '--check', '-c',
        action='store_true',
        help='Check configuration and exit'
    )

    return parser.parse_args(argv)


def check_configuration() -> bool:
    """Print the effective configuration and any validation issues"""
    print("Configuration check:")
    print(f"  App name: {settings.app_name}")
    print(f"  Version: {settings.app_version}")
    print(f"  Debug mode: {settings.debug}")
    print(f"  Host: {settings.host}")
    print(f"  Port: {settings.port}")
    print(f"  Target coverage: {settings.target_coverage}%")
    print(f"  Max range days: {settings.max_range_days}")
    print(f"  Default concurrency: {settings.default_max_concurrency}")

    issues = [
        f"{section}: {issue}"
        for section, section_issues in ConfigValidator.validate_all(settings).items()
        for issue in section_issues
    ]
    for issue in issues:
        print(f"  ! {issue}")

    return not issues


def main(argv=None):
    """Main entry point"""
    args = parse_args(argv)

    setup_logging(log_level=args.log_level)

    if args.check:
        sys.exit(0 if check_configuration() else 1)

    is_dev = args.dev or settings.debug

    print(f"\nStarting {settings.app_name}")
    print(f"   Mode: {'Development' if is_dev else 'Production'}")
    print(f"   URL: http://{args.host}:{args.port}")
    print(f"   Docs: http://{args.host}:{args.port}/docs")
    print()

    uvicorn.run(
        "src.shift_analytics.main:app",
        host=args.host,
        port=args.port,
        reload=is_dev,
        workers=1 if is_dev else args.workers,
        log_level=args.log_level,
        access_log=True,
    )


if __name__ == "__main__":
    main()
