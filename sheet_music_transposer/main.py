"""
Main entry point for the sheet_music_transposer command line.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from sheet_music_transposer import __version__
from sheet_music_transposer.config import get_config
from sheet_music_transposer.core.errors import ScoreError
from sheet_music_transposer.core.operations import (
    annotate_document,
    detect_key,
    transpose_document,
)
from sheet_music_transposer.core.parser import parse_musicxml
from sheet_music_transposer.core.solfege import SolfegeMode
from sheet_music_transposer.export import MusicXMLExporter, SolfegeExporter
from sheet_music_transposer.export.musicxml_exporter import MusicXMLExportOptions
from sheet_music_transposer.export.solfege_exporter import SolfegeExportOptions

logger = logging.getLogger(__name__)

SCORE_FILE = click.Path(exists=True, dir_okay=False, readable=True)


def _read_document(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def _fail(exc: Exception) -> None:
    logger.debug("Command failed", exc_info=True)
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


def _solfege_exporter() -> SolfegeExporter:
    export = get_config().export
    return SolfegeExporter(SolfegeExportOptions(
        encoding=export.encoding,
        json_indent=export.json_indent,
    ))


def _musicxml_exporter() -> MusicXMLExporter:
    return MusicXMLExporter(MusicXMLExportOptions(encoding=get_config().export.encoding))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="sheet-music-transposer")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Solfege annotation and transposition for MusicXML scores."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("file", type=SCORE_FILE)
def info(file: str) -> None:
    """Show title, composer, key, time and parts of FILE."""
    try:
        score = parse_musicxml(_read_document(file))
    except (ScoreError, OSError) as exc:
        _fail(exc)

    click.echo(f"Title:    {score.title}")
    click.echo(f"Composer: {score.composer}")
    click.echo(f"Key:      {score.key_signature}")
    click.echo(f"Time:     {score.time_signature.ratio_string}")
    for part in score.parts:
        notes = sum(len(m.notes) for m in part.measures)
        click.echo(f"Part {part.id} ({part.name}): {len(part.measures)} measures, {notes} notes")


@main.command()
@click.argument("file", type=SCORE_FILE)
@click.option("--key", default=None, metavar="KEY",
              help="Tonic for movable do. Defaults to the score's key.")
@click.option("--movable", is_flag=True, help="Use movable do instead of fixed do.")
@click.option("--output", "-o", default=None, metavar="PATH",
              help="Write JSON (or CSV for .csv) instead of printing.")
def solfege(file: str, key: Optional[str], movable: bool, output: Optional[str]) -> None:
    """
    List the solfege syllable of every note in FILE.

    Without --movable the configured mode is used.
    """
    mode = SolfegeMode.MOVABLE if movable else None
    try:
        annotations = annotate_document(_read_document(file), key, mode)
        if output:
            _solfege_exporter().export(annotations, output)
            return
    except (ScoreError, OSError) as exc:
        _fail(exc)

    for a in annotations:
        click.echo(f"{a.measure_number:>4} {a.note_index:>3}  {a.pitch_name:<5} {a.syllable}")


@main.command()
@click.argument("file", type=SCORE_FILE)
@click.option("--to", "to_key", required=True, metavar="KEY", help="Target tonic.")
@click.option("--from", "from_key", default=None, metavar="KEY",
              help="Current tonic. Defaults to the score's key.")
@click.option("--output", "-o", default=None, metavar="PATH",
              help="Output MusicXML file. Defaults to standard output.")
def transpose(file: str, to_key: str, from_key: Optional[str], output: Optional[str]) -> None:
    """
    Transpose FILE to another key.

    \b
    Examples:
      sheet-music-transposer transpose hymn.musicxml --to D
      sheet-music-transposer transpose hymn.musicxml --from C --to Bb -o hymn_bb.musicxml
    """
    try:
        document = _read_document(file)
        if from_key is None:
            from_key = detect_key(parse_musicxml(document))
        result = transpose_document(document, to_key, from_key)

        if output:
            path = _musicxml_exporter().export(result, output)
            click.echo(f"Transposed {from_key} -> {to_key}: {path}", err=True)
            return
    except (ScoreError, OSError) as exc:
        _fail(exc)

    click.echo(result, nl=False)


if __name__ == "__main__":
    main()
