"""translit CLI - Main entry point."""

import copy
import json
import sys
from pathlib import Path
from typing import Any

import click
import yaml  # type: ignore[import-untyped]
from tqdm import tqdm

from translit.export.manifest import build_manifest
from translit.ingest.loader import RESOURCES_DIR, load_default_tables, read_tables
from translit.models import Gender, Language, TableKind
from translit.qc.dedup import detect_duplicates
from translit.qc.rule_check import check_tables
from translit.translator import Translator
from translit.utils.io import write_json, write_lines
from translit.utils.log import setup_logging
from translit.utils.parallel import map_parallel_ordered
from translit.utils.schema import validate_settings


PACKAGE_DIR = Path(__file__).parent
SETTINGS_PATH = PACKAGE_DIR / "etc" / "settings.yaml"
SCHEMA_DIR = PACKAGE_DIR / "etc" / "schemas"

DEFAULT_SETTINGS: dict[str, Any] = {
    "defaults": {"source": "en", "target": "si", "gender": "u"},
    "paths": {"data": None},
    "logging": {"level": "WARNING", "format": "pretty", "file": None},
    "parallel": {"workers": 4},
}

GENDER_CODES = {
    "u": Gender.UNSPECIFIED,
    "m": Gender.MALE,
    "f": Gender.FEMALE,
}

LANGUAGE_CHOICE = click.Choice([language.value for language in Language])
GENDER_CHOICE = click.Choice(list(GENDER_CODES))


def load_settings(settings_path: Path | None = None) -> dict[str, Any]:
    """Load and validate settings.yaml."""
    settings_path = settings_path or SETTINGS_PATH
    if not settings_path.exists():
        click.echo(f"Warning: settings.yaml not found at {settings_path}, using defaults", err=True)
        return copy.deepcopy(DEFAULT_SETTINGS)

    with settings_path.open(encoding="utf-8") as f:
        settings: dict[str, Any] = yaml.safe_load(f) or {}

    errors = validate_settings(settings, SCHEMA_DIR)
    if errors:
        click.echo(f"Error: invalid settings in {settings_path}:", err=True)
        for error in errors:
            click.echo(f"  ERROR: {error}", err=True)
        sys.exit(1)

    return settings


def _data_dir(ctx: click.Context) -> Path:
    return ctx.obj["data_dir"]


def _get_translator(ctx: click.Context) -> Translator:
    logger = ctx.obj["logger"]
    return Translator(load_default_tables(_data_dir(ctx), logger), logger)


def _resolve_options(
    ctx: click.Context,
    source: str | None,
    target: str | None,
    gender: str | None,
) -> tuple[Language, Language, Gender]:
    """Fill unset language and gender options from the settings defaults."""
    defaults = ctx.obj["settings"]["defaults"]
    return (
        Language(source or defaults["source"]),
        Language(target or defaults["target"]),
        GENDER_CODES[gender or defaults["gender"]],
    )


def language_options(func: Any) -> Any:
    """Attach the shared -s/-t/-g options."""
    func = click.option("--gender", "-g", type=GENDER_CHOICE, help="Gender hint: m, f or u (default from settings)")(func)
    func = click.option("--target", "-t", type=LANGUAGE_CHOICE, help="Target language (default from settings)")(func)
    func = click.option("--source", "-s", type=LANGUAGE_CHOICE, help="Source language (default from settings)")(func)
    return func


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Settings file (default: bundled settings.yaml)",
)
@click.option(
    "--data-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory with rule and dictionary tables",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None, data_dir: Path | None) -> None:
    """English / Sinhala / Tamil phonetic transliteration CLI."""
    settings = load_settings(config_path)

    # Setup logging
    log_level = "DEBUG" if verbose else settings["logging"]["level"]
    log_format = settings["logging"].get("format", "pretty")
    log_file = settings["logging"].get("file")

    logger = setup_logging(level=log_level, format_type=log_format, log_file=Path(log_file) if log_file else None)

    configured_dir = settings["paths"].get("data")

    # Store in context
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["logger"] = logger
    ctx.obj["data_dir"] = data_dir or (Path(configured_dir) if configured_dir else RESOURCES_DIR)


@cli.command()
@language_options
@click.argument("text", nargs=-1)
@click.pass_context
def translate(
    ctx: click.Context,
    source: str | None,
    target: str | None,
    gender: str | None,
    text: tuple[str, ...],
) -> None:
    """Translate TEXT, or stdin line by line when no TEXT is given."""
    logger = ctx.obj["logger"]

    try:
        src, tgt, gen = _resolve_options(ctx, source, target, gender)
        translator = _get_translator(ctx)

        # Fail on the pair before reading any input
        translator.resolve(src, tgt)

        if text:
            lines: Any = [" ".join(text)]
        else:
            lines = (line.rstrip("\r\n") for line in click.get_text_stream("stdin"))

        for line in lines:
            click.echo(translator.translate_line(line, src, tgt, gen))

    except Exception as e:
        logger.error(f"Translation failed: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command("file")
@language_options
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--workers", type=click.IntRange(min=1), help="Worker threads (default from settings)")
@click.option("--no-progress", is_flag=True, help="Hide the progress bar")
@click.pass_context
def translate_file(
    ctx: click.Context,
    source: str | None,
    target: str | None,
    gender: str | None,
    input_path: Path,
    output_path: Path,
    workers: int | None,
    no_progress: bool,
) -> None:
    """Translate INPUT_PATH line by line into OUTPUT_PATH."""
    logger = ctx.obj["logger"]
    settings = ctx.obj["settings"]

    try:
        src, tgt, gen = _resolve_options(ctx, source, target, gender)
        translator = _get_translator(ctx)
        translator.resolve(src, tgt)

        with input_path.open(encoding="utf-8") as f:
            lines = [line.rstrip("\r\n") for line in f]

        max_workers = workers or settings["parallel"]["workers"]
        logger.info(f"Translating {len(lines)} lines from {input_path} with {max_workers} workers")

        results = map_parallel_ordered(
            lambda line: translator.translate_line(line, src, tgt, gen),
            lines,
            max_workers=max_workers,
        )
        count = write_lines(
            output_path,
            tqdm(results, total=len(lines), desc="Translating", unit="line", disable=no_progress),
        )

        click.echo(f"Translated {count} lines to {output_path}")

    except Exception as e:
        logger.error(f"File translation failed: {e}", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.group()
def tables() -> None:
    """Rule and dictionary table commands."""
    pass


@tables.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show rule and dictionary counts."""
    logger = ctx.obj["logger"]
    data_dir = _data_dir(ctx)

    try:
        report = read_tables(data_dir, logger)
        loaded = report.tables

        click.echo(f"Tables: {data_dir}\n")

        click.echo("Rules:")
        for language in Language:
            encoders = loaded.encoders.get(language)
            decoders = loaded.decoders.get(language)
            click.echo(
                f"  {language.value}: {len(encoders) if encoders else 0} encode, "
                f"{len(decoders) if decoders else 0} decode"
            )

        click.echo("\nDictionaries:")
        for (lang_a, lang_b), dictionary in loaded.dictionaries.items():
            click.echo(
                f"  {lang_a.value} -> {lang_b.value}: "
                f"{len(dictionary.names)} names, {len(dictionary.other)} other"
            )

        pairs = ", ".join(f"{s.value}->{t.value}" for s, t in loaded.pairs())
        click.echo(f"\nSupported pairs: {pairs}")

        if report.rejected:
            click.echo(f"Rejected records: {len(report.rejected)} (run 'translit tables check')")

    except Exception as e:
        logger.error(f"Stats failed: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@tables.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Check tables for rejected records, shadowed rules and duplicate keys."""
    logger = ctx.obj["logger"]

    try:
        report = read_tables(_data_dir(ctx), logger)
        result = check_tables(report, logger)

        for record in result.rejected:
            click.echo(f"  REJECTED: {record}", err=True)

        for entry in result.shadowed:
            click.echo(f"  SHADOWED: {entry.table} rule {entry.index} ({entry.pattern}) behind rule {entry.shadowed_by}")

        for file_report in report.files:
            if file_report.kind != TableKind.DICTIONARY:
                continue
            dedup_result = detect_duplicates(file_report.path, logger)
            for duplicate in dedup_result.duplicate_keys:
                lines = ", ".join(str(n) for n in duplicate.line_numbers)
                click.echo(
                    f"  DUPLICATE: {file_report.path.name} {duplicate.direction} "
                    f"{duplicate.partition} {duplicate.key!r} (lines {lines})"
                )

        if result.valid:
            click.echo("All table checks passed")
        else:
            click.echo(f"Found {len(result.rejected)} rejected records", err=True)
            sys.exit(1)

    except Exception as e:
        logger.error(f"Table check failed: {e}", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@tables.command()
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write manifest JSON here")
@click.pass_context
def manifest(ctx: click.Context, output: Path | None) -> None:
    """Build a manifest of the table files."""
    logger = ctx.obj["logger"]
    data_dir = _data_dir(ctx)

    try:
        report = read_tables(data_dir, logger)
        manifest_data = build_manifest(report, data_dir, logger).to_dict()

        if output:
            write_json(output, manifest_data)
            click.echo(f"Manifest written to {output}")
        else:
            click.echo(json.dumps(manifest_data, ensure_ascii=False, indent=2))

    except Exception as e:
        logger.error(f"Manifest build failed: {e}", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def main() -> None:
    """Entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
