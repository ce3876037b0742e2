"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
from pathlib import Path

import aiohttp
import typer
from rich.console import Console
from rich.logging import RichHandler

from telemoji import __version__
from telemoji.api.client import TelegramBotClient
from telemoji.core.pack_exporter import PackExporter
from telemoji.core.references import resolve_pack_references
from telemoji.exceptions import NoValidPacksError, OutputDirectoryError, TelemojiError
from telemoji.media.downloader import close_connection_pool
from telemoji.models.config import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_HOST,
    DEFAULT_OUT_DIR,
    ExportConfig,
)
from telemoji.models.pack import PackReference
from telemoji.models.stats import ExportStats
from telemoji.storage.config_manager import ConfigManager
from telemoji.utils.formatting import mask_token
from telemoji.utils.path import create_dir

from .formatters import (
    format_error_with_suggestions,
    print_references_table,
    print_summary_panel,
)
from .reporter import ExportReporter

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("telemoji")

app = typer.Typer(
    name="telemoji",
    help=(
        "Download Telegram sticker and custom emoji packs, together with a"
        " meta.json manifest for each pack."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def prepare_output_root(out_dir: Path) -> None:
    """Creates the root output directory, which is fatal to fail."""
    try:
        create_dir(out_dir)
    except OSError as e:
        raise OutputDirectoryError(
            f"Failed to prepare output directory '{out_dir}': {e}"
        ) from e


async def run_export(
    config: ExportConfig,
    references: list[PackReference],
    reporter: ExportReporter,
) -> ExportStats:
    """Authenticates the bot and exports every referenced pack in order."""
    api_client = TelegramBotClient(config.tg_bot_token, config.api_base_url)
    try:
        bot_user = await api_client.get_me()
        log.info(
            f"Authorized on account [bold]{bot_user.get('username', 'unknown')}[/bold]"
        )

        exporter = PackExporter(config, api_client, observer=reporter)
        await exporter.export_all(references)
        return exporter.stats
    finally:
        await close_connection_pool()
        await api_client.close()


@app.command(
    help=(
        "Download one or more packs. Each PACK link may be followed by a custom"
        " output id:\n\n"
        "[cyan]telemoji https://t.me/addemoji/abcd custom"
        " https://t.me/addstickers/efgh[/cyan]"
    )
)
def main(
    ctx: typer.Context,
    packs: list[str] | None = typer.Argument(  # noqa: B008
        None,
        help="Pack links (t.me/addstickers/… or t.me/addemoji/…), each optionally"
        " followed by a custom output id.",
        metavar="PACK [OUT_ID] [PACK [OUT_ID]]...",
        show_default=False,
    ),
    config_path: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILE), "--config", "-c", help="Config file path."
    ),
    out_dir: Path = typer.Option(
        Path(DEFAULT_OUT_DIR), "--outdir", "-o", help="Pack save directory."
    ),
    host: str = typer.Option(
        DEFAULT_HOST, "--host", help="Instance name written into each pack manifest."
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug, including API calls).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
):
    """Telegram sticker pack exporter."""
    if version:
        console.print(f"[bold]telemoji[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("telemoji").setLevel(log_level)

    if not packs:
        console.print(ctx.get_help())
        raise typer.Exit()

    reporter = ExportReporter()
    try:
        resolved = resolve_pack_references(packs)
        reporter.resolve_finished(resolved)
        if not resolved.references:
            raise NoValidPacksError("No valid packs were given.")
        print_references_table(resolved.references)

        prepare_output_root(out_dir)
        config = ConfigManager(config_path).load_config(
            {"out_dir": out_dir, "host": host}
        )
        log.debug(
            f"Loaded config from {config.config_path} "
            f"(token {mask_token(config.tg_bot_token)}, api {config.api_base_url})"
        )

        stats = asyncio.run(run_export(config, resolved.references, reporter))
    except TelemojiError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        console.print(format_error_with_suggestions(e, {"stage": "authentication"}))
        log.debug("Full traceback:", exc_info=True)
        raise typer.Exit(code=1) from e

    print_summary_panel(stats)
    log.info("All packs processed, enjoy.")
