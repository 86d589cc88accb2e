import argparse
import logging
from pathlib import Path
from typing import Optional

from pyeditor.core.config_manager import EditorConfig, load_config
from pyeditor.interfaces.cli import EditorCLI


class EditorSupportApp:
    """Application controller for the editor support tools."""

    def __init__(self, config: Optional[EditorConfig] = None, config_path: Optional[Path] = None):
        self.config = config or load_config(config_path)
        self.cli = EditorCLI(self.config)
        self.logger = logging.getLogger(__name__)

        self.logger.debug(f"Editor support initialized for board {self.config.board_id}")

    def run_cli(self, args: argparse.Namespace) -> bool:
        """Handle CLI commands."""
        if args.command == 'boards':
            return self.cli.list_boards()

        elif args.command == 'api':
            return self.cli.show_api(args.board_id, getattr(args, 'prefix', None))

        elif args.command == 'imports':
            return self.cli.show_imports(args.file)

        elif args.command == 'check':
            return self.cli.check_file(args.file, getattr(args, 'board', None))

        elif args.command == 'analyze':
            return self.cli.analyze(args.path, getattr(args, 'board', None))

        elif args.command == 'web':
            return self.run_web(args.host, args.port)

        else:
            self.logger.error(f"Unknown command: {args.command}")
            return False

    def run_web(self, host: str = "127.0.0.1", port: int = 8000) -> bool:
        """Run web interface."""
        from pyeditor.interfaces.web_app import create_app
        import uvicorn

        fastapi_app = create_app(self.config)
        self.logger.info(f"Serving editor support API on http://{host}:{port}")
        uvicorn.run(fastapi_app, host=host, port=port)
        return True
