"""Click CLI — the main entry point for rds-codec.

Commands:
  rds encode -g 0A|2A ...   Encode station fields into an RDS bit string
  rds decode -b BITS        Decode a 416-bit (0A) or 1664-bit (2A) bit string
  rds inspect -b BITS       Show every block with its recovered role
  rds config [KEY VALUE]    Show or change saved defaults
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .blocks import GroupType, parse_rows, split_groups
from .config import load_config, save_config, set_value
from .errors import RdsError
from .fields import PS_LENGTH, RT_LENGTH
from .packet import decode_packet, encode_program_service, encode_radio_text, format_lines, to_dict
from .sync import classify_rows

console = Console()
err_console = Console(stderr=True)

# Characters accepted for -ps / -rt
_TEXT_PATTERN = re.compile(r"[a-zA-Z0-9 ]*")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _parse_frequencies(ctx, param, value: str | None) -> tuple[float, float] | None:
    """Parse "88.3,90.1" into two frequencies."""
    if value is None:
        return None
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 2:
        raise click.BadParameter("expected exactly two frequencies, e.g. 88.3,90.1")
    try:
        return (float(parts[0]), float(parts[1]))
    except ValueError:
        raise click.BadParameter(f"invalid frequency value: {value}") from None


def _check_text(ctx, param, value: str | None) -> str | None:
    if value is not None and not _TEXT_PATTERN.fullmatch(value):
        raise click.BadParameter("only letters, digits and spaces are allowed")
    return value


def _require(value, name: str, option: str):
    if value is None:
        raise click.UsageError(f"{name} is not specified. Option: {option}")
    return value


def _emit(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text + "\n")
        err_console.print(f"Wrote {output}")
    else:
        click.echo(text)


@click.group()
@click.version_option(version="0.1.0", prog_name="rds-codec")
@click.option("-v", "--verbose", is_flag=True, help="Log block-level details to stderr")
def cli(verbose: bool):
    """RDS group 0A / 2A encoder and decoder."""
    _setup_logging(verbose)


@cli.command()
@click.option("-g", "--group-type", type=click.Choice([gt.label for gt in GroupType], case_sensitive=False),
              required=True,
              help="Group type to encode")
@click.option("-pi", "--program-identifier", type=click.IntRange(0, 0xFFFF), default=None,
              help="Program identifier (16-bit)")
@click.option("-pty", "--program-type", type=click.IntRange(0, 31), default=None, help="Program type (0-31)")
@click.option("-tp", "--traffic-program", type=click.IntRange(0, 1), default=None, help="Traffic program (0/1)")
@click.option("-ms", "--music-speech", type=click.IntRange(0, 1), default=None,
              help="1 for Music, 0 for Speech (0A)")
@click.option("-ta", "--traffic-announcement", type=click.IntRange(0, 1), default=None,
              help="Traffic announcement (0/1, 0A)")
@click.option("-af", "--alternative-frequencies", callback=_parse_frequencies, default=None,
              help="Two alternative frequencies in MHz, e.g. 88.3,90.1 (0A)")
@click.option("-ps", "--program-service", callback=_check_text, default=None,
              help="Program service name, up to 8 characters (0A)")
@click.option("-rt", "--radio-text", callback=_check_text, default=None,
              help="Radio text, up to 64 characters (2A)")
@click.option("-ab", "--ab-flag", type=click.IntRange(0, 1), default=None, help="Radio text A/B flag (2A)")
@click.option("--output", "-o", type=click.Path(), default=None, help="Write the bit string to a file")
def encode(group_type: str, program_identifier: int | None, program_type: int | None,
           traffic_program: int | None, music_speech: int | None, traffic_announcement: int | None,
           alternative_frequencies: tuple[float, float] | None, program_service: str | None,
           radio_text: str | None, ab_flag: int | None, output: str | None):
    """Encode station fields into an RDS bit string.

    \b
    Examples:
      rds encode -g 0A -pi 4660 -pty 5 -tp 1 -ms 1 -ta 0 -af 104.5,98.0 -ps "RadioXYZ"
      rds encode -g 2A -pi 4660 -pty 5 -tp 1 -ab 0 -rt "Now playing song"
    """
    cfg = load_config()
    station = cfg.get("station", {})
    ps_cfg = cfg.get("program_service", {})
    rt_cfg = cfg.get("radio_text", {})

    # Apply config defaults if flags not explicitly set
    if program_identifier is None:
        program_identifier = station.get("program_identifier")
    if program_type is None:
        program_type = station.get("program_type")
    if traffic_program is None:
        traffic_program = station.get("traffic_program")

    _require(program_identifier, "Program identifier", "-pi, --program-identifier")
    _require(program_type, "Program type", "-pty, --program-type")
    _require(traffic_program, "Traffic program", "-tp, --traffic-program")

    try:
        if GroupType.from_label(group_type) is GroupType.ZERO_A:
            if music_speech is None:
                music_speech = ps_cfg.get("music")
            if traffic_announcement is None:
                traffic_announcement = ps_cfg.get("traffic_announcement")
            if alternative_frequencies is None and ps_cfg.get("alternative_frequencies"):
                alternative_frequencies = _parse_frequencies(
                    None, None, str(ps_cfg["alternative_frequencies"])
                )

            _require(music_speech, "Music/Speech", "-ms, --music-speech")
            _require(traffic_announcement, "Traffic announcement", "-ta, --traffic-announcement")
            _require(alternative_frequencies, "Alternative frequencies", "-af, --alternative-frequencies")
            _require(program_service, "Program service", "-ps, --program-service")
            if len(program_service) > PS_LENGTH:
                raise click.UsageError(f"Program service must be at most {PS_LENGTH} characters")

            bits = encode_program_service(
                program_identifier=program_identifier,
                program_type=program_type,
                traffic_program=bool(traffic_program),
                traffic_announcement=bool(traffic_announcement),
                music=bool(music_speech),
                af=alternative_frequencies,
                name=program_service,
            )
        else:
            if ab_flag is None:
                ab_flag = rt_cfg.get("ab_flag")

            _require(ab_flag, "AB flag", "-ab, --ab-flag")
            _require(radio_text, "Radio text", "-rt, --radio-text")
            if len(radio_text) > RT_LENGTH:
                raise click.UsageError(f"Radio text must be at most {RT_LENGTH} characters")

            bits = encode_radio_text(
                program_identifier=program_identifier,
                program_type=program_type,
                traffic_program=bool(traffic_program),
                text_ab=bool(ab_flag),
                text=radio_text,
            )
    except RdsError as e:
        raise click.ClickException(str(e)) from e

    _emit(bits, output)


@cli.command()
@click.option("-b", "--binary-data", required=True, help="Bit string of '0' and '1' (416 or 1664 bits)")
@click.option("--format", "fmt", type=click.Choice(["text", "json"]), default=None,
              help="Output format (default from config, else text)")
@click.option("--output", "-o", type=click.Path(), default=None, help="Write the decoded fields to a file")
def decode(binary_data: str, fmt: str | None, output: str | None):
    """Decode a 0A (Program Service) or 2A (Radio Text) bit string."""
    if fmt is None:
        fmt = load_config().get("output", {}).get("format") or "text"

    try:
        result = decode_packet(binary_data.strip())
    except RdsError as e:
        raise click.ClickException(str(e)) from e

    if fmt == "json":
        _emit(json.dumps(to_dict(result), indent=2), output)
    else:
        _emit("\n".join(format_lines(result)), output)


@cli.command("inspect")
@click.option("-b", "--binary-data", required=True, help="Bit string of '0' and '1'")
def inspect_cmd(binary_data: str):
    """Show every block of a bit string with its recovered role."""
    try:
        groups = split_groups(parse_rows(binary_data.strip()))
    except RdsError as e:
        raise click.ClickException(str(e)) from e

    table = Table(title="Blocks")
    table.add_column("Group", justify="right")
    table.add_column("Row", justify="right")
    table.add_column("Data", style="cyan")
    table.add_column("Check", style="magenta")
    table.add_column("Block", justify="center")

    unmatched = 0
    for g, rows in enumerate(groups):
        for r, (row, role) in enumerate(zip(rows, classify_rows(rows))):
            if role is None:
                unmatched += 1
            table.add_row(
                str(g),
                str(r),
                f"{row.data:016b}",
                f"{row.checkword:010b}",
                role.value if role else "[red]-[/]",
            )

    console.print(table)
    console.print(f"\n[bold]Summary:[/]")
    console.print(f"  Groups:          {len(groups)}")
    console.print(f"  Blocks:          {len(groups) * 4}")
    console.print(f"  Unmatched:       {unmatched}")


@cli.command("config")
@click.argument("key", required=False)
@click.argument("value", required=False)
def config_cmd(key: str | None, value: str | None):
    """Show saved defaults, or set one with KEY VALUE (e.g. station.program_identifier 4660)."""
    cfg = load_config()

    if key is not None:
        if value is None:
            raise click.UsageError("Provide a VALUE to set")
        set_value(cfg, key, value)
        path = save_config(cfg)
        console.print(f"[bold]Config saved:[/] {path}")
        return

    table = Table(title="Configuration")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")
    for section, values in cfg.items():
        if isinstance(values, dict):
            for k, v in values.items():
                table.add_row(f"{section}.{k}", "-" if v is None else str(v))
        else:
            table.add_row(section, "-" if values is None else str(values))
    console.print(table)
