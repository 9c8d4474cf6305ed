"""Command-line interface for debug-json."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .lexer import DebugTextLexer
from .naming import keep_as_is, pascal_case
from .transcoder import JSONDebugTranscoder


def _read_input(input_file: Optional[Path]) -> str:
    if input_file is None:
        return click.get_text_stream("stdin").read()
    return input_file.read_text(encoding="utf-8")


@click.group()
@click.version_option(version=__version__)
def main():
    """debug-json - Convert pretty debug dumps of records to minified JSON."""
    pass


@main.command()
@click.argument('input_file', required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path), help='Output JSON file path (default: stdout)')
@click.option('--pascal-case', 'use_pascal_case', is_flag=True, help='Rename snake_case fields to PascalCase')
@click.option('--strict', is_flag=True, help='Fail on variants and unrecognized fragments instead of dropping them')
@click.option('--check', is_flag=True, help='Fail if the output is not a valid JSON object')
@click.option('--profile', is_flag=True, help='Print performance metrics to stderr')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def convert(input_file: Optional[Path], output: Optional[Path], use_pascal_case: bool,
            strict: bool, check: bool, profile: bool, verbose: bool):
    """Convert a debug dump (file or stdin) to minified JSON."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    transcoder = JSONDebugTranscoder(
        rename_field=pascal_case if use_pascal_case else keep_as_is,
        strict=strict,
        enable_profiling=profile
    )
    result = transcoder.transcode_text(_read_input(input_file))

    if not result.success:
        click.echo("❌ Conversion failed:", err=True)
        for error in result.errors or []:
            click.echo(f"   • {error}", err=True)
        for warning in result.warnings:
            click.echo(f"   → {warning}", err=True)
        sys.exit(1)

    if output:
        output.write_text(result.json_string, encoding='utf-8')
        click.echo(f"✅ Wrote {len(result.json_string)} chars to {output}", err=True)
    else:
        click.echo(result.json_string)

    if transcoder.profiler is not None:
        click.echo(transcoder.profiler.export_metrics("summary"), err=True)

    if check and result.warnings:
        click.echo("❌ Output check failed:", err=True)
        for warning in result.warnings:
            click.echo(f"   • {warning}", err=True)
        sys.exit(1)


@main.command()
@click.argument('input_file', required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
def fragments(input_file: Optional[Path]):
    """Print the fragments of a debug dump, one per line."""
    for fragment in DebugTextLexer().tokenize(_read_input(input_file)):
        click.echo(repr(fragment))


if __name__ == '__main__':
    main()
