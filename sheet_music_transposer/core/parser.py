"""
MusicXML parser - builds the Score model from score-partwise text.

Only the elements the rest of the package needs are read: work title,
creators, part list, parts, measures, attributes and notes. Missing
optional elements fall back to defaults; only a document without a
score-partwise element is rejected.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional, Union

from sheet_music_transposer.core.errors import InvalidSpelling, MalformedDocument
from sheet_music_transposer.core.keys import clamp_fifths
from sheet_music_transposer.core.pitch import Pitch
from sheet_music_transposer.core.score import (
    Attributes,
    Clef,
    KeySignature,
    Measure,
    Note,
    Part,
    Score,
    TimeSignature,
)

logger = logging.getLogger(__name__)

ROOT_TAG = "score-partwise"

DEFAULT_TITLE = "Untitled"
DEFAULT_COMPOSER = "Unknown"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def read_int(text: Optional[str], default: Optional[int] = None) -> Optional[int]:
    """
    Read the leading integer of an element's text.

    "12" -> 12, "3a" -> 3, "-1.5" -> -1; anything without a leading
    integer (or None) gives ``default``.
    """
    if text is None:
        return default
    match = _LEADING_INT.match(text)
    if match is None:
        return default
    return int(match.group(1))


def _text(element: Optional[ET.Element]) -> str:
    if element is None or element.text is None:
        return ""
    return element.text.strip()


def load_document(text: str) -> ET.Element:
    """
    Parse MusicXML text into an element tree and return its top element.

    Comments inside the document are kept so the tree can be written back.

    Raises:
        MalformedDocument: if the text is empty or not well-formed XML
    """
    if not isinstance(text, str) or not text.strip():
        raise MalformedDocument("MusicXML document is empty")

    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        root = ET.fromstring(text, parser=parser)
    except ET.ParseError as e:
        raise MalformedDocument(f"Could not read MusicXML: {e}") from e

    return root


def find_score_root(root: ET.Element) -> ET.Element:
    """Locate the score-partwise element at or below ``root``."""
    if root.tag == ROOT_TAG:
        return root

    score = root.find(f".//{ROOT_TAG}")
    if score is None:
        raise MalformedDocument(f"Not a MusicXML {ROOT_TAG} document")
    return score


class MusicXMLParser:
    """
    Convert a MusicXML score-partwise document into a Score.

    The parser is stateless; one instance can be shared between threads.
    """

    def parse(self, text: str) -> Score:
        """
        Parse MusicXML text.

        Args:
            text: MusicXML document text

        Returns:
            Score model

        Raises:
            MalformedDocument: if the document cannot be read
        """
        return self.parse_root(find_score_root(load_document(text)))

    def parse_root(self, score: ET.Element) -> Score:
        """Build a Score from an already located score-partwise element."""
        return Score(
            title=self.extract_title(score),
            composer=self.extract_composer(score),
            parts=tuple(self.extract_parts(score)),
        )

    def extract_title(self, score: ET.Element) -> str:
        return _text(score.find("work/work-title")) or DEFAULT_TITLE

    def extract_composer(self, score: ET.Element) -> str:
        composer = _text(score.find("identification/creator[@type='composer']"))
        if composer:
            return composer

        # Fall back to whoever is credited first
        return _text(score.find("identification/creator")) or DEFAULT_COMPOSER

    def extract_parts(self, score: ET.Element) -> List[Part]:
        declarations = score.findall("part-list/score-part")
        parts = []

        for index, part_element in enumerate(score.findall("part")):
            part_id = part_element.get("id") or f"P{index + 1}"

            name = ""
            for declaration in declarations:
                if declaration.get("id") == part_id:
                    name = _text(declaration.find("part-name"))
                    break

            parts.append(Part(
                id=part_id,
                name=name or f"Part {index + 1}",
                measures=tuple(self.extract_measures(part_element)),
            ))

        return parts

    def extract_measures(self, part: ET.Element) -> List[Measure]:
        measures = []
        for measure in part.findall("measure"):
            measures.append(Measure(
                number=read_int(measure.get("number"), 0),
                notes=tuple(self.extract_notes(measure)),
                attributes=self.extract_attributes(measure),
            ))
        return measures

    def extract_attributes(self, measure: ET.Element) -> Optional[Attributes]:
        attributes = measure.find("attributes")
        if attributes is None:
            return None

        key_element = attributes.find("key")
        time_element = attributes.find("time")
        clef_element = attributes.find("clef")

        key = None
        if key_element is not None:
            fifths = read_int(key_element.findtext("fifths"), 0)
            if clamp_fifths(fifths) != fifths:
                logger.warning(f"Key fifths {fifths} out of range, clamping")
                fifths = clamp_fifths(fifths)
            key = KeySignature(
                fifths=fifths,
                mode=_text(key_element.find("mode")) or "major",
            )

        time = None
        if time_element is not None:
            time = TimeSignature(
                beats=read_int(time_element.findtext("beats")) or 4,
                beat_type=read_int(time_element.findtext("beat-type")) or 4,
            )

        clef = None
        if clef_element is not None:
            clef = Clef(
                sign=_text(clef_element.find("sign")) or None,
                line=read_int(clef_element.findtext("line")),
            )

        return Attributes(
            divisions=read_int(attributes.findtext("divisions")),
            key=key,
            time=time,
            clef=clef,
        )

    def extract_notes(self, measure: ET.Element) -> List[Note]:
        notes = []
        for note in measure.findall("note"):
            is_rest = note.find("rest") is not None
            notes.append(Note(
                duration=read_int(note.findtext("duration"), 0),
                type=_text(note.find("type")) or None,
                is_rest=is_rest,
                pitch=None if is_rest else self.extract_pitch(note),
            ))
        return notes

    def extract_pitch(self, note: ET.Element) -> Optional[Pitch]:
        """Read a note's pitch, None when it is missing or unreadable."""
        pitch = note.find("pitch")
        if pitch is None:
            return None

        step = _text(pitch.find("step"))
        octave = read_int(pitch.findtext("octave"))
        if not step or octave is None:
            logger.warning(f"Skipping incomplete pitch (step={step!r}, octave={octave})")
            return None

        try:
            return Pitch(step.upper(), read_int(pitch.findtext("alter"), 0), octave)
        except InvalidSpelling:
            logger.warning(f"Skipping pitch with invalid step {step!r}")
            return None


_parser = MusicXMLParser()


def parse_musicxml(text: str) -> Score:
    """Parse MusicXML text into a Score."""
    return _parser.parse(text)


def parse_musicxml_file(filepath: Union[str, Path]) -> Score:
    """
    Load a score from a MusicXML file.

    Raises:
        FileNotFoundError: if the file does not exist
        MalformedDocument: if the file is not a score-partwise document
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    return parse_musicxml(filepath.read_text(encoding="utf-8"))
