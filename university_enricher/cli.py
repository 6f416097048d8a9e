"""CLI interface for the university enricher.

Usage:
    university-enricher enrich                      # Enrich the seed universities
    university-enricher enrich-csv                  # Batch-enrich the CSV dataset
    university-enricher enrich-csv --country MX     # Only Mexican universities
    university-enricher tech-stack                  # Fill tech stacks via BuiltWith
    university-enricher report                      # Print quality report
    university-enricher export                      # Generate CSV/XLSX exports
"""

import logging
import sys
from pathlib import Path

import click

from university_enricher.backends import OpenAICompletionBackend
from university_enricher.config import ConfigError, load_environment, load_settings
from university_enricher.enricher import UniversityEnricher
from university_enricher.export import Exporter
from university_enricher.ingestion import (
    DEFAULT_CSV_PATH,
    DEFAULT_SEED_PATH,
    load_seed_universities,
    process_universities,
)
from university_enricher.pipeline import DEFAULT_BATCH_DELAY, DEFAULT_BATCH_SIZE, Pipeline
from university_enricher.quality import QualityChecker
from university_enricher.scraping import ThroxyClient, collect_tech_stacks
from university_enricher.storage import load_universities, save_universities
from university_enricher.utils.normalization import resolve_country

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = Path("output")


def _fail(message: str):
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load_settings_or_exit():
    """Validate configuration before any work starts."""
    try:
        return load_settings()
    except ConfigError as e:
        _fail(str(e))


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--env-file", type=click.Path(path_type=Path), default=None,
              help="Path to a .env file (defaults to ./.env)")
@click.pass_context
def cli(ctx, verbose, env_file):
    """University data enrichment using LLM lookups"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ctx.ensure_object(dict)
    load_environment(env_file)


@cli.command()
@click.option("--seed", "seed_path", type=click.Path(path_type=Path), default=DEFAULT_SEED_PATH,
              help="YAML seed file with universities")
@click.option("--output", "output_path", type=click.Path(path_type=Path),
              default=DEFAULT_OUTPUT_DIR / "enriched_universities.json", help="Output JSON path")
@click.option("--concurrency", default=3, show_default=True,
              help="Universities enriched at the same time")
def enrich(seed_path, output_path, concurrency):
    """Enrich the seed universities."""
    settings = _load_settings_or_exit()

    try:
        universities = load_seed_universities(seed_path)
    except FileNotFoundError as e:
        _fail(str(e))

    enricher = UniversityEnricher(
        OpenAICompletionBackend.from_settings(settings),
        concurrency_limit=concurrency,
    )

    click.echo("Starting university data enrichment...")
    enriched = enricher.enrich_universities(universities)
    save_universities(enriched, output_path)
    click.echo(f"Enrichment complete! Results saved to {output_path}")


@cli.command("enrich-csv")
@click.option("--csv", "csv_path", type=click.Path(path_type=Path), default=DEFAULT_CSV_PATH,
              help="world-universities CSV dataset")
@click.option("--country", "countries", multiple=True,
              help="Restrict to a country (ISO code or name); repeatable")
@click.option("--batch-size", default=DEFAULT_BATCH_SIZE, show_default=True)
@click.option("--delay", default=DEFAULT_BATCH_DELAY, show_default=True,
              help="Seconds to wait between batches")
@click.option("--concurrency", default=5, show_default=True,
              help="Universities enriched at the same time")
@click.option("--output", "output_path", type=click.Path(path_type=Path),
              default=DEFAULT_OUTPUT_DIR / "enriched_universities_kaggle.json",
              help="Output JSON path (rewritten after every batch)")
@click.option("--filtered-output", "filtered_path", type=click.Path(path_type=Path),
              default=DEFAULT_OUTPUT_DIR / "filtered_universities.json",
              help="Where to save the filtered dataset before enrichment")
def enrich_csv(csv_path, countries, batch_size, delay, concurrency, output_path, filtered_path):
    """Batch-enrich universities from the CSV dataset."""
    settings = _load_settings_or_exit()

    country_codes = []
    for value in countries:
        code = resolve_country(value)
        if code is None:
            _fail(f"Unsupported country '{value}'")
        country_codes.append(code)

    click.echo("Processing universities from CSV dataset...")
    try:
        universities = process_universities(csv_path, country_codes or None)
    except FileNotFoundError as e:
        _fail(str(e))

    save_universities(universities, filtered_path)

    enricher = UniversityEnricher(
        OpenAICompletionBackend.from_settings(settings),
        concurrency_limit=concurrency,
    )
    pipeline = Pipeline(enricher, output_path, batch_size=batch_size, batch_delay=delay)
    enriched = pipeline.run(universities)

    click.echo(f"Enrichment complete! {len(enriched)} universities saved to {output_path}")


@cli.command("tech-stack")
@click.option("--input", "input_path", type=click.Path(path_type=Path),
              default=DEFAULT_OUTPUT_DIR / "enriched_universities.json")
@click.option("--output", "output_path", type=click.Path(path_type=Path), default=None,
              help="Output JSON path (defaults to overwriting the input)")
@click.option("--concurrency", default=5, show_default=True)
def tech_stack(input_path, output_path, concurrency):
    """Fill tech stacks from BuiltWith via the scraping API."""
    settings = _load_settings_or_exit()

    try:
        universities = load_universities(input_path)
    except FileNotFoundError as e:
        _fail(str(e))

    client = ThroxyClient(settings.throxy_api_key)
    updated = collect_tech_stacks(client, universities, concurrency_limit=concurrency)
    save_universities(updated, output_path or input_path)


@cli.command()
@click.option("--input", "input_path", type=click.Path(path_type=Path),
              default=DEFAULT_OUTPUT_DIR / "enriched_universities.json")
def report(input_path):
    """Print the enrichment quality report."""
    try:
        universities = load_universities(input_path)
    except FileNotFoundError as e:
        _fail(str(e))
    click.echo(QualityChecker(universities).generate_report())


@cli.command("export")
@click.option("--input", "input_path", type=click.Path(path_type=Path),
              default=DEFAULT_OUTPUT_DIR / "enriched_universities.json")
@click.option("--export-dir", type=click.Path(path_type=Path), default=None)
def export_cmd(input_path, export_dir):
    """Generate CSV, Excel and Markdown exports."""
    try:
        universities = load_universities(input_path)
    except FileNotFoundError as e:
        _fail(str(e))

    results = Exporter(universities, export_dir=export_dir).export_all()

    click.echo("--- Exports ---")
    for export_type, filepath in results.items():
        if filepath:
            click.echo(f"  {export_type}: {filepath}")
        else:
            click.echo(f"  {export_type}: (no data)")


if __name__ == "__main__":
    cli()
