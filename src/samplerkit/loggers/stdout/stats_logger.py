from typing import Any, Dict, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table


class StatsStdoutLogger:
    """
    Prints the metrics recorded by a StatsEngine as a Rich table,
    one row per metric name.
    """

    def __init__(self, name: str = "Samplers", console: Optional[Console] = None):
        self.name = name
        self.console = console or Console()

    def _format(self, value: Any) -> str:
        if value is None:
            return "-"
        if isinstance(value, float):
            return f"{value:.2f}"
        return str(value)

    def build_table(self, summary: Dict[str, Dict[str, Any]]) -> Table:
        table = Table(show_header=True, header_style="bold magenta", box=None)
        table.add_column("Metric", justify="left", style="bold cyan")
        table.add_column("Count", justify="right")
        table.add_column("Average", justify="right")
        table.add_column("Min", justify="right")
        table.add_column("Max", justify="right")

        for metric_name, stats in summary.items():
            table.add_row(
                metric_name,
                self._format(stats.get("count", 0)),
                self._format(stats.get("average")),
                self._format(stats.get("min")),
                self._format(stats.get("max")),
            )
        return table

    def log_summary(self, summary: Dict[str, Dict[str, Any]]):
        """Logs the summary as a Rich panel."""
        if not summary:
            body = "[dim]No metrics recorded[/dim]"
        else:
            body = self.build_table(summary)
        panel = Panel(body, title=f"[bold cyan]{self.name} - Summary", border_style="cyan")
        self.console.print(panel)
