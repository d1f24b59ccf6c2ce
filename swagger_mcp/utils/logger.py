# This file is part of the Swagger-MCP project for logging and console management.
# Author: shiboli
# date: 2026-10-19
# Version: 0.2.0

import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

if TYPE_CHECKING:
    from swagger_mcp.models.tool import Catalog

# Custom level between INFO and WARNING for completed discovery passes and calls
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_METHOD_STYLES = {
    "GET": "green",
    "POST": "yellow",
    "PUT": "blue",
    "DELETE": "red",
}


class ConsoleManager:
    """
    Console output of the Swagger-MCP server.

    Log records go to stderr through Rich, so stdout stays free for a
    tool-invocation transport. Argument values and credentials are never
    passed to this class by the rest of the package.
    """
    def __init__(self, name: str = "Swagger-MCP"):
        self._console = Console(theme=Theme({"logging.level.success": "bold green"}), stderr=True)
        self._logger = logging.getLogger(name)
        if not self._logger.handlers:
            handler = RichHandler(
                console=self._console,
                rich_tracebacks=True,
                show_path=False,
                keywords=["GET", "POST", "PUT", "DELETE", "SUCCESS"],
            )
            handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
            self._logger.addHandler(handler)
            self._logger.setLevel(logging.INFO)

    def set_level(self, level: str):
        self._logger.setLevel(level.upper())

    def debug(self, message: str):
        self._logger.debug(message)

    def info(self, message: str):
        self._logger.info(message)

    def success(self, message: str):
        self._logger.log(SUCCESS_LEVEL_NUM, message)

    def warning(self, message: str):
        self._logger.warning(message)

    def error(self, message: str):
        self._logger.error(message)

    def exception(self, message: str):
        self._logger.exception(message)

    def rule(self, title: str, style: str = "cyan"):
        self._console.rule(f"[bold {style}]{title}[/bold {style}]", style=style)

    def display_catalog(self, catalog: "Catalog"):
        """Prints one row per discovered tool: id, verb, path and parameter names."""
        table = Table(show_header=True, header_style="bold magenta", box=None, show_edge=False)
        table.add_column("Tool", style="cyan", no_wrap=True)
        table.add_column("Method", no_wrap=True)
        table.add_column("Path", style="white")
        table.add_column("Parameters", style="dim")

        for tool in catalog.tools():
            style = _METHOD_STYLES.get(tool.http_method, "magenta")
            table.add_row(
                tool.id,
                f"[{style}]{tool.http_method}[/{style}]",
                tool.path,
                ", ".join(p.name for p in tool.parameters) or "-",
            )

        api = f"{catalog.title} ({catalog.source})" if catalog.title else catalog.source
        title = f"✓ {len(catalog)} tools from {api}, version {catalog.version}"
        subtitle = f"API root: {catalog.server_url}" if catalog.server_url else None
        self._console.print(Panel(table, title=f"[bold green]{title}[/bold green]",
                                  subtitle=subtitle, border_style="green"))

    def display_error_panel(self, title: str, error_message: str):
        panel = Panel(error_message, title=f"[bold red]{title}[/bold red]", border_style="red")
        self._console.print(panel)


# Create a singleton instance for global use
console = ConsoleManager()
