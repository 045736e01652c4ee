#!/usr/bin/env python3
"""
attrkv Shell Entry Point

This is the main entry point for the attrkv command shell.

Usage:
    attrkv                          # Interactive shell on stdin/stdout
    attrkv --input commands.txt     # Run commands from a file
    attrkv --no-banner              # Skip the prompt line
    attrkv --debug                  # Enable debug logging
    python -m attrkv                # Same as attrkv

Environment Variables:
    ATTRKV_BANNER       - Print the prompt line on start (true/false)
    ATTRKV_PROMPT       - Prompt line text
    ATTRKV_DEBUG        - Enable debug mode (true/false)
    ATTRKV_LOG_LEVEL    - Log level when not in debug mode
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config.settings import settings
from .shell import AttributeShell
from .store.store import AttributeStore


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="attrkv: In-Memory Attribute-Typed Key-Value Store",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--input",
        type=str,
        default=None,
        help="Read commands from this file instead of stdin",
    )

    parser.add_argument(
        "--no-banner",
        dest="banner",
        action="store_false",
        default=settings.BANNER,
        help="Do not print the prompt line on start",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.DEBUG,
        help="Enable debug logging",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level when --debug is not set",
    )

    return parser.parse_args(argv)


def setup_logging(debug: bool = False, level: str = "WARNING") -> None:
    """Configure logging; stderr keeps log lines out of command output."""
    logging.basicConfig(
        level=logging.DEBUG if debug else getattr(logging, level.upper(), logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the shell."""
    args = parse_args(argv)

    setup_logging(debug=args.debug, level=args.log_level)
    logger = logging.getLogger(__name__)

    store = AttributeStore()
    shell = AttributeShell(store=store, banner=args.banner)

    logger.info("Starting attrkv shell")
    logger.info(f"  Input: {args.input or '<stdin>'}")
    logger.info(f"  Debug: {args.debug}")

    try:
        if args.input:
            try:
                reader = open(args.input, encoding="utf-8")
            except OSError as exc:
                logger.error(f"Cannot read input file {args.input}: {exc}")
                sys.exit(1)
            with reader:
                shell.run(reader, sys.stdout)
        else:
            shell.run(sys.stdin, sys.stdout)
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
    finally:
        logger.info(f"Shell stopped: {shell.get_stats()}")


if __name__ == "__main__":
    main()
