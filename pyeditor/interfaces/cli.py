from functools import wraps
from pathlib import Path
from typing import Callable, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from pyeditor.core.autocomplete import get_compatible_api
from pyeditor.core.boards import list_boards
from pyeditor.core.config_manager import EditorConfig
from pyeditor.utils.code_analyzer import (
    ImportNode,
    analyze_project,
    detect_imports,
    find_incompatible_imports,
)
from pyeditor.utils.exceptions import EditorSupportError


def handle_errors(func: Callable[..., bool]) -> Callable[..., bool]:
    """
    Decorator to wrap CLI operations with consistent error handling.
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs) -> bool:
        try:
            return func(self, *args, **kwargs)
        except (EditorSupportError, ValueError) as e:
            self._print(f"❌ {e}", "red")
        except OSError as e:
            self._print(f"❌ File error: {e}", "red")
        except Exception as e:
            self._print(f"❌ Unexpected error: {e}", "red")
        return False
    return wrapper


class EditorCLI:
    def __init__(self, config: EditorConfig, console: Optional[Console] = None):
        self.config = config
        self.console = console or Console()

    def _print(self, message: str, style: str = ""):
        self.console.print(message, style=style)

    def _print_table(self, rows: List[List[str]], headers: List[str], title: str = ""):
        table = Table(title=title, box=box.ROUNDED)
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*row)
        self.console.print(table)

    def _board(self, board_id: Optional[str]) -> str:
        return str(board_id or self.config.board_id)

    @handle_errors
    def list_boards(self) -> bool:
        rows = [
            [board_id, info['name'], info['capability']]
            for board_id, info in list_boards().items()
        ]
        self._print_table(rows, ["Board ID", "Name", "API"], "micro:bit Boards")
        return True

    @handle_errors
    def show_api(self, board_id: Optional[str] = None, prefix: Optional[str] = None) -> bool:
        board = self._board(board_id)
        words = get_compatible_api(board)
        if prefix:
            words = [w for w in words if w.startswith(prefix)]
        if not words:
            self._print(f"🔍 No API names match '{prefix}'", "yellow")
            return True
        for word in words:
            self.console.print(word, highlight=False)
        self._print(f"{len(words)} names for board {board}", "dim")
        return True

    @handle_errors
    def show_imports(self, file_path: Path) -> bool:
        source = Path(file_path).read_text(encoding='utf-8')
        imports = detect_imports(source)
        if imports.is_empty:
            self._print(f"📂 No imports found in {file_path}", "yellow")
            return True
        tree = Tree(f"[bold]{file_path}[/bold]")
        self._add_import_branches(tree, imports)
        self.console.print(tree)
        return True

    def _add_import_branches(self, tree: Tree, node: ImportNode):
        for name, child in node.children.items():
            label = f"[green]{name}[/green]" if child.imported else f"[dim]{name}[/dim]"
            self._add_import_branches(tree.add(label), child)

    @handle_errors
    def check_file(self, file_path: Path, board_id: Optional[str] = None) -> bool:
        board = self._board(board_id)
        source = Path(file_path).read_text(encoding='utf-8')
        unavailable = find_incompatible_imports(board, source)
        if unavailable:
            self._print(f"❌ {file_path} is not compatible with board {board}", "bold red")
            for name in unavailable:
                self._print(f"  • {name}", "red")
            return False
        self._print(f"✅ {file_path} is compatible with board {board}", "green")
        return True

    @handle_errors
    def analyze(self, path: Path, board_id: Optional[str] = None) -> bool:
        board = self._board(board_id)
        if not Path(path).is_dir():
            raise ValueError(f"Not a directory: {path}")
        with self.console.status(f"Analyzing {path}..."):
            warnings = analyze_project(Path(path), board)
        if not warnings:
            self._print(f"✅ All scripts in {path} are compatible with board {board}", "green")
            return True
        for warning in warnings:
            self._print(f"⚠️  {warning}", "yellow")
        return False
