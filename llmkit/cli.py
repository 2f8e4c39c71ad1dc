"""
Command-line interface for structured output conversion.

Reads model output from a file or stdin, detects its format and prints the
conversion bundle as formatted JSON on stdout.

Exit codes:
- 0: success (skipped targets are reported on stderr but do not fail the run)
- 1: detection or parse failure
- 2: configuration error (unknown or disabled target, bad or unreadable settings file)
"""

import json
from pathlib import Path

import typer

from llmkit.contexts.conversion import convert
from llmkit.contexts.conversion.logger import setup_conversion_logger
from llmkit.utils.exceptions import ConfigurationError, ConversionError
from llmkit.utils.settings import LOGS_PATH, load_settings
from llmkit.utils.timestamp import now

app = typer.Typer(
    add_completion=False,
    help="Detect the format of structured model output and re-render it",
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def main(
    file: Path = typer.Option(
        None,
        "--file",
        help="Input file (reads stdin if omitted)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    targets: str = typer.Option(
        None,
        "--targets",
        help="Comma-separated targets: json,yaml,toml,csv (default: all enabled)",
    ),
    single_format: str = typer.Option(
        None,
        "--format",
        help="Single target; overrides --targets",
    ),
    permissive: bool = typer.Option(
        False,
        "--permissive",
        help="Reserved for lenient parsing (currently no effect)",
    ),
    max_bytes: int = typer.Option(
        None,
        "--max-bytes",
        help="Only read the first N bytes of input",
        min=0,
    ),
    log: bool = typer.Option(
        False,
        "--log",
        help="Write a DEBUG log to LOGS_PATH/convert_TIMESTAMP/",
    ),
    log_dir: Path = typer.Option(
        None,
        "--log-dir",
        help="Write a DEBUG log to this directory (implies --log)",
        file_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug messages on stderr",
    ),
):
    """
    Convert structured model output between formats.

    Examples:\n

        $ echo '{"a":1,"b":"x"}' | llmkit

        $ llmkit --file reply.md --targets yaml,toml

        $ llmkit --file rows.csv --format json --max-bytes 65536
    """
    if log and log_dir is None:
        log_dir = LOGS_PATH / f"convert_{now()}"

    requested = single_format or targets
    setup_conversion_logger(log_dir, targets=requested, verbose=verbose)

    raw = file.read_bytes() if file else typer.get_binary_stream("stdin").read()

    try:
        settings = load_settings()
        bundle = convert(
            raw,
            targets=requested.split(",") if requested is not None else None,
            permissive=permissive,
            max_bytes=max_bytes,
            settings=settings,
        )
    except (ConfigurationError, ValueError, OSError) as e:
        typer.secho(f"Configuration error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)
    except ConversionError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(bundle.as_dict(), indent=2, ensure_ascii=False))

    for target, reason in bundle.skipped.items():
        typer.secho(f"Skipped {target}: {reason}", fg=typer.colors.YELLOW, err=True)

    if log_dir is not None:
        typer.echo(f"Log: {log_dir / 'convert.log'}", err=True)


if __name__ == "__main__":
    app()
