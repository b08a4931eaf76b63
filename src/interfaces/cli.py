"""Command-line interface for the vocabulary parser."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from composition_root import bootstrap_registry
from application.services.vocabulary_parser import VocabularyParser
from config.parser_config import ConfigurationError, ParserConfig
from domain.parsing_errors import VocabularyParseError

# --- Environment Loading ---
load_dotenv()

logger = logging.getLogger(__name__)


# --- Typer App ---
app = typer.Typer(
    help="Parse ActivityStreams vocabulary definitions into a vocabulary model.",
    add_completion=False,
)


def _load_config(config_path: Optional[Path], verbose: bool) -> ParserConfig:
    try:
        config = ParserConfig.from_env(str(config_path) if config_path else None)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return config


# --- CLI Commands ---


@app.command()
def parse(
    path: Path = typer.Argument(..., help="JSON vocabulary definition to parse"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML configuration file"),
    summary: bool = typer.Option(False, "--summary", help="Only print entity counts"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Parses a vocabulary definition and prints the result."""
    parser_config = _load_config(config, verbose)

    try:
        with open(path, "r", encoding="utf-8") as f:
            document = json.load(f)
    except (OSError, ValueError) as e:
        typer.echo(f"Error: cannot read {path}: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        registry = bootstrap_registry(parser_config)
        result = VocabularyParser(registry).parse(document)
    except (ConfigurationError, VocabularyParseError) as e:
        logger.debug("Parse failed", exc_info=True)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if summary:
        typer.echo(json.dumps(result.summary(), indent=2))
    else:
        typer.echo(str(result))


@app.command()
def ontologies(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML configuration file"),
):
    """Lists the ontologies registered by the configuration."""
    parser_config = _load_config(config, verbose=False)
    try:
        registry = bootstrap_registry(parser_config)
    except (ConfigurationError, VocabularyParseError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    names = registry.ontology_names()
    if not names:
        typer.echo("No ontologies configured.")
    for name in names:
        typer.echo(name)


if __name__ == "__main__":
    app()
