"""Click CLI entry point for the transformer."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from markdown_confluence_sync.config import LoggingSettings, TransformerOptions, load_config
from markdown_confluence_sync.errors import ConfluenceSyncError
from markdown_confluence_sync.logging_config import get_logger, setup_logging
from markdown_confluence_sync.transformer import ConfluencePageTransformer

logger = get_logger("cli")


@click.command()
@click.argument("markdown_file", type=click.Path(allow_dash=True, path_type=Path))
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(path_type=Path),
    help="Configuration file (default: search the current directory)",
)
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Write ADF JSON to a file")
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indentation")
@click.option("--show-plugins", is_flag=True, help="Print the resolved plugin order")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def cli(
    markdown_file: Path,
    config_path: Path | None,
    output: Path | None,
    indent: int,
    show_plugins: bool,
    verbose: bool,
) -> None:
    """Convert a Markdown file to Confluence ADF JSON.

    MARKDOWN_FILE: Path to the Markdown file, or - for stdin
    """
    try:
        config = load_config(config_path)
        setup_logging(LoggingSettings.from_config(config), verbose)

        transformer = ConfluencePageTransformer(
            TransformerOptions(config_path=config_path), config=config
        )

        if str(markdown_file) == "-":
            markdown = sys.stdin.read()
        else:
            if not markdown_file.exists():
                raise click.BadParameter(f"File not found: {markdown_file}")
            markdown = markdown_file.read_text()

        logger.info(f"Transforming {markdown_file}")
        adf = transformer.transform(markdown)
    except ConfluenceSyncError as e:
        raise click.ClickException(str(e)) from e

    if show_plugins:
        plugins = transformer.get_plugin_configuration()
        click.echo(f"Markdown plugins: {', '.join(plugins['markdown'])}", err=True)
        click.echo(f"HTML plugins: {', '.join(plugins['html'])}", err=True)

    rendered = json.dumps(adf, indent=indent, ensure_ascii=False)
    if output:
        output.write_text(rendered + "\n")
        click.echo(f"Wrote {output}", err=True)
    else:
        click.echo(rendered)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
