import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from app import EditorSupportApp
from pyeditor.core.config_manager import load_config
from pyeditor.utils.exceptions import ConfigError
from pyeditor.utils.logger import setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="micro:bit Python Editor - support tools",
        epilog="""
Examples:
    %(prog)s boards                         # List known boards
    %(prog)s api 9903 --prefix microbit.    # Autocomplete words for a V2 board
    %(prog)s imports main.py                # Show the imports of a script
    %(prog)s check main.py --board 9900     # Check a script against a V1 board
    %(prog)s analyze scripts/               # Check every script in a directory
    %(prog)s web                            # Web API
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    # Global options
    parser.add_argument('--config', '-c', type=Path,
                        help='Configuration file (default: ./pyeditor.json)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable verbose logging')
    parser.add_argument('--log-file', help='Log file path')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    subparsers.add_parser('boards', help='List known micro:bit boards')

    api_parser = subparsers.add_parser('api', help='Print autocomplete words for a board')
    api_parser.add_argument('board_id', nargs='?', help='Board ID (configured board if not specified)')
    api_parser.add_argument('--prefix', '-p', help='Only show words starting with this prefix')

    imports_parser = subparsers.add_parser('imports', help='Show the imports detected in a script')
    imports_parser.add_argument('file', type=Path, help='Python script')

    check_parser = subparsers.add_parser('check', help='Check a script against the API of a board')
    check_parser.add_argument('file', type=Path, help='Python script')
    check_parser.add_argument('--board', '-b', help='Board ID (configured board if not specified)')

    analyze_parser = subparsers.add_parser('analyze', help='Check every script in a directory')
    analyze_parser.add_argument('path', type=Path, help='Directory to analyze')
    analyze_parser.add_argument('--board', '-b', help='Board ID (configured board if not specified)')

    web_parser = subparsers.add_parser('web', help='Start web API')
    web_parser.add_argument('--host', default='127.0.0.1', help='Host address')
    web_parser.add_argument('--port', '-p', type=int, default=8000, help='Port number')

    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(2)

    log_level = "DEBUG" if args.verbose else config.log_level
    try:
        setup_logging(log_level, args.log_file or config.log_file)
    except ValueError as e:
        print(f"❌ Could not set up logging: {e}", file=sys.stderr)
        sys.exit(2)

    logger = logging.getLogger(__name__)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        app = EditorSupportApp(config)
        success = app.run_cli(args)
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Application failed: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
