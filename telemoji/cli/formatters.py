"""
Functions for formatting and displaying data in the console using Rich.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from telemoji.models.pack import PackReference
from telemoji.models.stats import ExportStats
from telemoji.utils.formatting import describe_error, format_duration, format_size


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = describe_error(error)

    suggestions_map = {
        "ConfigurationError": [
            "• Check that the config file exists and is valid JSON.",
            '• It must contain {"tg_bot_token": "<token from @BotFather>"}.',
            "• Use --config to point at a different file.",
        ],
        "NoValidPacksError": [
            "• Pass links like https://t.me/addstickers/<name>.",
            "• Custom emoji packs use https://t.me/addemoji/<name>.",
            "• An optional custom id may follow each link.",
        ],
        "AuthenticationError": [
            "• Verify the bot token in the configuration file.",
            "• The token may have been revoked. Ask @BotFather for a new one.",
        ],
        "OutputDirectoryError": [
            "• Check the permissions of the parent directory.",
            "• Use --outdir to choose another location.",
        ],
        "ClientConnectorError": [
            "• A network connection issue occurred.",
            "• Check that api.telegram.org is reachable from this machine.",
        ],
        "TimeoutError": [
            "• The Telegram Bot API did not answer in time.",
            "• Please try again in a few minutes.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_references_table(references: list[PackReference]):
    """Displays the packs that are about to be downloaded."""
    console = Console()
    table = Table(title="Packs to download", title_justify="left")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Pack", style="cyan")
    table.add_column("Output ID", style="green")
    for i, reference in enumerate(references, 1):
        output_id = reference.effective_output_id
        if reference.output_id is None:
            output_id = f"[dim]{output_id}[/dim]"
        table.add_row(str(i), reference.remote_id, output_id)
    console.print(table)


def print_summary_panel(stats: ExportStats):
    """Displays the final summary of the export session."""
    console = Console()

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=20)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row(
        "✓ Packs exported:", f"[bold green]{stats.packs_exported}[/bold green]"
    )
    if stats.packs_skipped > 0:
        stats_table.add_row(
            "○ Packs skipped:",
            f"[yellow]{stats.packs_skipped}[/yellow] "
            f"[dim]({', '.join(stats.skipped_pack_ids)})[/dim]",
        )
    stats_table.add_row(
        "✓ Files saved:", f"[green]{stats.assets_downloaded}[/green]"
    )
    if stats.assets_failed > 0:
        stats_table.add_row(
            "✗ Files failed:", f"[bold red]{stats.assets_failed}[/bold red]"
        )

    stats_table.add_row("", "")  # Spacer
    stats_table.add_row("Total size:", format_size(stats.total_size_downloaded))
    stats_table.add_row("Duration:", format_duration(stats.elapsed))

    if stats.packs_skipped or stats.assets_failed:
        border, title = "yellow", "[bold yellow]Export Finished With Issues[/]"
    else:
        border, title = "green", "[bold green]Export Complete[/]"

    console.print()
    console.print(Panel(stats_table, title=title, border_style=border, expand=False))
