"""Command line interface for btcodec.

Provides:
- ``decode``: render a bencoded value as JSON
- ``encode``: bencode a JSON document
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import click

from btcodec import __version__
from btcodec.config.config import ConfigManager, init_config
from btcodec.core.decoder import MAX_DEPTH_LIMIT, BencodeDecoder
from btcodec.core.encoder import encode
from btcodec.core.native import from_native, to_json_compatible
from btcodec.models import LogLevel
from btcodec.utils.console_utils import print_error, print_success
from btcodec.utils.exceptions import (
    BencodeDecodeError,
    BencodeEncodeError,
    ConfigurationError,
)
from btcodec.utils.logging_config import LoggingContext, setup_logging

logger = logging.getLogger(__name__)

EXIT_CODEC_ERROR = 1

STDIN_MARKER = "-"


def _log_level_for(verbose: int) -> LogLevel | None:
    """Map -v count to a log level; None keeps the configured level."""
    if verbose >= 2:
        return LogLevel.DEBUG
    if verbose == 1:
        return LogLevel.INFO
    return None


def _read_input(encoded: str | None, path: Path | None) -> bytes:
    if encoded is not None and path is not None:
        msg = "Pass either ENCODED or --file, not both"
        raise click.UsageError(msg)
    if path is not None:
        try:
            return path.read_bytes()
        except OSError as e:
            raise click.FileError(str(path), hint=e.strerror or str(e)) from e
    if encoded is None:
        msg = "Missing ENCODED argument (use '-' to read stdin)"
        raise click.UsageError(msg)
    if encoded == STDIN_MARKER:
        return click.get_binary_stream("stdin").read()
    # Recover the raw argv bytes so length prefixes count bytes, not characters
    return os.fsencode(encoded)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Configuration file path",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v: info, -vv: debug)",
)
@click.version_option(__version__, prog_name="btcodec")
@click.pass_context
def cli(ctx, config, verbose):
    """Bencode decoder and encoder."""
    ctx.ensure_object(dict)
    try:
        config_manager = init_config(config)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    observability = config_manager.config.observability
    level = _log_level_for(verbose)
    if level is not None:
        observability = observability.model_copy(update={"log_level": level})
    setup_logging(observability)

    ctx.obj["config_manager"] = config_manager
    ctx.obj["verbosity"] = verbose


@cli.command("decode")
@click.argument("encoded", required=False)
@click.option(
    "--file",
    "-f",
    "path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read the encoded value from a file",
)
@click.option(
    "--permissive",
    is_flag=True,
    help="Accept unsorted or duplicate dictionary keys with a warning",
)
@click.option(
    "--max-depth",
    type=click.IntRange(1, MAX_DEPTH_LIMIT),
    help="Maximum container nesting depth",
)
@click.option(
    "--allow-trailing",
    is_flag=True,
    help="Ignore bytes after the top-level value",
)
@click.option(
    "--indent",
    type=click.IntRange(0),
    help="Pretty-print JSON with this indent",
)
@click.pass_context
def decode_cmd(ctx, encoded, path, permissive, max_depth, allow_trailing, indent):
    """Decode ENCODED and print it as JSON.

    Byte strings are shown as text; undecodable bytes are replaced, or
    backslash-escaped in dictionary keys.
    """
    config_manager: ConfigManager = ctx.obj["config_manager"]
    try:
        config = config_manager.with_overrides(
            strict=False if permissive else None,
            max_depth=max_depth,
            allow_trailing=True if allow_trailing else None,
        )
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    data = _read_input(encoded, path)
    decoder = BencodeDecoder.from_config(config.codec)
    try:
        with LoggingContext("decode", logger=logger, size=len(data)):
            value = decoder.decode_value(data)
    except BencodeDecodeError as e:
        print_error(str(e))
        ctx.exit(EXIT_CODEC_ERROR)

    rendered = to_json_compatible(value, encoding=config.codec.text_encoding)
    click.echo(json.dumps(rendered, indent=indent, ensure_ascii=False))


@cli.command("encode")
@click.argument("document")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Write the encoded bytes to a file instead of stdout",
)
@click.pass_context
def encode_cmd(ctx, document, output):
    """Bencode a JSON DOCUMENT.

    Strings are encoded as byte strings; floats, booleans and null have no
    bencode form and are rejected.
    """
    config_manager: ConfigManager = ctx.obj["config_manager"]
    try:
        obj = json.loads(document)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON: {e}"
        raise click.BadParameter(msg, param_hint="DOCUMENT") from e

    try:
        with LoggingContext("encode", logger=logger):
            data = encode(from_native(obj, config_manager.config.codec.text_encoding))
    except BencodeEncodeError as e:
        print_error(e.message)
        ctx.exit(EXIT_CODEC_ERROR)

    if output is not None:
        try:
            output.write_bytes(data)
        except OSError as e:
            raise click.FileError(str(output), hint=e.strerror or str(e)) from e
        print_success(f"Wrote {len(data)} bytes to {output}")
        return

    stdout = click.get_binary_stream("stdout")
    stdout.write(data)
    stdout.flush()


def main():
    """Main CLI entry point."""
    cli(prog_name="btcodec")


if __name__ == "__main__":
    main()
