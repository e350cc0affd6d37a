"""
Console rendering of resolved statuses with Rich components.
"""

from typing import Dict, List, Mapping, Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.tree import Tree
from rich.theme import Theme
from rich import box
from rich.markup import escape

from ..config.settings import Settings
from ..git_ops.records import FileRecord, FileStatus


STATUS_LABELS: Dict[FileStatus, str] = {
    FileStatus.UPTODATE: "Up to date",
    FileStatus.MODIFIED: "Modified",
    FileStatus.STAGED: "Staged",
    FileStatus.UNKNOWN: "Untracked",
    FileStatus.ADDED: "Added",
    FileStatus.DELETED: "Deleted",
    FileStatus.UNMERGED: "Unmerged",
    FileStatus.KILLED: "Killed",
}


class RepoStatusConsole:
    """Console interface for repo-status output."""

    def __init__(self, settings: Settings, console: Optional[Console] = None):
        """Initialize console with settings."""
        self.settings = settings
        self._setup_styles()
        self.console = console or Console(
            color_system="auto" if settings.ui.use_colors else None,
            theme=self.theme
        )
        if console is not None:
            self.console.push_theme(self.theme)

    def _setup_styles(self) -> None:
        """Setup custom styles for consistent theming."""
        self.styles = {
            "title": "bold blue",
            "success": "bold green",
            "warning": "bold yellow",
            "error": "bold red",
            "info": "blue",
            "muted": "dim",
            "directory": "bold blue",
            "uptodate": "dim",
            "modified": "yellow",
            "staged": "green",
            "unknown": "magenta",
            "added": "bold green",
            "deleted": "red",
            "unmerged": "bold red",
            "killed": "red",
        }

        self.theme = Theme(self.styles)

    def _status_markup(self, status: Optional[FileStatus]) -> str:
        if status is None:
            return "[muted]—[/muted]"
        return f"[{status.value}]{STATUS_LABELS[status]}[/{status.value}]"

    def _visible(self, status: Optional[FileStatus]) -> bool:
        return self.settings.ui.show_clean or status is not FileStatus.UPTODATE

    def print_status_table(self, statuses: Mapping[str, FileStatus], title: str = "File Status") -> None:
        """Print a path/status table, sorted by path."""
        rows = [(name, status) for name, status in sorted(statuses.items()) if self._visible(status)]
        if not rows:
            self.print_info("Nothing to report")
            return

        table = Table(title=title, box=box.SIMPLE_HEAD)
        table.add_column("Status", style="bold", width=12)
        table.add_column("File", style="bold")

        for name, status in rows:
            table.add_row(self._status_markup(status), escape(name))

        self.console.print(table)

    def print_status_tree(self, root_label: str, records: List[FileRecord]) -> None:
        """Print records, already in display order, as a nested tree."""
        tree = Tree(f"[title]{escape(root_label)}[/title]")
        nodes: Dict[str, Tree] = {"": tree}

        def node_for(directory: str) -> Tree:
            if directory not in nodes:
                parent, _, leaf = directory.rpartition("/")
                nodes[directory] = node_for(parent).add(f"[directory]{escape(leaf)}/[/directory]")
            return nodes[directory]

        for record in records:
            if not self._visible(record.status):
                continue
            parent, _, leaf = record.name.rpartition("/")
            if record.is_directory:
                node = node_for(record.name)
                node.label = f"[directory]{escape(leaf)}/[/directory] {self._status_markup(record.status)}"
            else:
                node_for(parent).add(f"{escape(leaf)} {self._status_markup(record.status)}")

        self.console.print(tree)

    def show_summary(self, statuses: Mapping[str, FileStatus]) -> None:
        """Print one line with a count per status."""
        counts: Dict[FileStatus, int] = {}
        for status in statuses.values():
            counts[status] = counts.get(status, 0) + 1
        parts = [
            f"[{status.value}]{counts[status]} {STATUS_LABELS[status].lower()}[/{status.value}]"
            for status in FileStatus if status in counts
        ]
        self.console.print(f"[info]Files:[/info] {', '.join(parts) if parts else '[muted]none[/muted]'}")

    def show_configuration(self) -> None:
        """Show the active configuration."""
        git = self.settings.git
        ui = self.settings.ui
        panel = Panel(
            f"[bold]Git executable:[/bold] {git.executable}\n"
            f"[bold]Compare target:[/bold] {git.compare_target}\n"
            f"[bold]Listing flags:[/bold] {' '.join(git.listing_flags)}\n"
            f"[bold]Detect conflicts:[/bold] {git.detect_conflicts}\n"
            f"[bold]Show clean files:[/bold] {ui.show_clean}\n"
            f"[bold]Colors:[/bold] {ui.use_colors}\n"
            f"[bold]Log level:[/bold] {ui.log_level}",
            title="Configuration",
            box=box.ROUNDED,
            style="blue"
        )
        self.console.print(panel)

    def print_success(self, message: str) -> None:
        """Print success message."""
        self.console.print(f"[success]✓ {message}[/success]")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self.console.print(f"[warning]⚠ {message}[/warning]")

    def print_error(self, message: str) -> None:
        """Print error message."""
        self.console.print(f"[error]✗ {message}[/error]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self.console.print(f"[info]ℹ {message}[/info]")
