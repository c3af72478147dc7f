"""
Transposition engine - move a MusicXML score to another key.

The document is parsed into a private element tree, the Score model is
transposed functionally, and the new pitches and key signatures are
written into that tree before it is serialized. The caller's text is
never modified, and nothing is returned when any step fails.
"""

from __future__ import annotations

import dataclasses
import logging
import re
import xml.etree.ElementTree as ET
from typing import Optional

from sheet_music_transposer.core.keys import key_tonic, key_to_fifths
from sheet_music_transposer.core.parser import (
    MusicXMLParser,
    find_score_root,
    load_document,
)
from sheet_music_transposer.core.pitch import (
    Pitch,
    SpellingPolicy,
    from_chromatic_index,
)
from sheet_music_transposer.core.score import Attributes, Measure, Score

logger = logging.getLogger(__name__)


def calculate_semitones(from_key: str, to_key: str) -> int:
    """
    Smallest signed semitone shift between two keys.

    Args:
        from_key: Current tonic, e.g. "C"
        to_key: Target tonic, e.g. "D"

    Returns:
        Semitones in -11..11 (positive = up)

    Raises:
        InvalidKey: if either key name cannot be read
    """
    semitones = key_tonic(to_key).chromatic_index - key_tonic(from_key).chromatic_index

    while semitones > 11:
        semitones -= 12
    while semitones < -11:
        semitones += 12

    return semitones


def transpose_pitch(
    pitch: Pitch,
    semitones: int,
    fifths: int = 0,
    spelling: SpellingPolicy = SpellingPolicy.KEY,
) -> Pitch:
    """
    Move a pitch by a number of semitones and re-spell it.

    Args:
        pitch: Pitch to move
        semitones: Shift (positive = up)
        fifths: Key signature the result is spelled for
        spelling: Enharmonic spelling policy

    Returns:
        New Pitch
    """
    return from_chromatic_index(pitch.chromatic_index + semitones, spelling, fifths)


def _transpose_measure(
    measure: Measure,
    semitones: int,
    fifths: int,
    spelling: SpellingPolicy,
) -> Measure:
    notes = tuple(
        note if note.is_rest or note.pitch is None
        else dataclasses.replace(
            note, pitch=transpose_pitch(note.pitch, semitones, fifths, spelling)
        )
        for note in measure.notes
    )

    attributes: Optional[Attributes] = measure.attributes
    if attributes is not None and attributes.key is not None:
        attributes = dataclasses.replace(
            attributes, key=dataclasses.replace(attributes.key, fifths=fifths)
        )

    return dataclasses.replace(measure, notes=notes, attributes=attributes)


def transpose_score(
    score: Score,
    semitones: int,
    to_key: str,
    spelling: SpellingPolicy = SpellingPolicy.KEY,
) -> Score:
    """
    Build a transposed copy of a Score.

    Every pitched note is moved by ``semitones`` and every key signature is
    set to the fifths of ``to_key``. Rests, note counts and measure/part
    structure are unchanged.
    """
    fifths = key_to_fifths(to_key)
    parts = tuple(
        dataclasses.replace(part, measures=tuple(
            _transpose_measure(measure, semitones, fifths, spelling)
            for measure in part.measures
        ))
        for part in score.parts
    )
    return dataclasses.replace(score, parts=parts)


def _write_pitch(pitch_element: ET.Element, pitch: Pitch) -> None:
    """Store step/alter/octave in a pitch element; alter is omitted when 0."""
    step_element = pitch_element.find("step")
    alter_element = pitch_element.find("alter")
    octave_element = pitch_element.find("octave")

    step_element.text = pitch.step

    if pitch.alter != 0:
        if alter_element is None:
            alter_element = ET.Element("alter")
            alter_element.tail = step_element.tail
        else:
            pitch_element.remove(alter_element)
        # alter always sits immediately before octave
        position = list(pitch_element).index(octave_element)
        pitch_element.insert(position, alter_element)
        alter_element.text = str(pitch.alter)
    elif alter_element is not None:
        pitch_element.remove(alter_element)

    octave_element.text = str(pitch.octave)


def _write_score(score_element: ET.Element, score: Score, fifths: int) -> None:
    """Copy the model's pitches and the new key signature into the tree."""
    part_elements = score_element.findall("part")
    for part_element, part in zip(part_elements, score.parts):
        measure_elements = part_element.findall("measure")
        for measure_element, measure in zip(measure_elements, part.measures):
            note_elements = measure_element.findall("note")
            for note_element, note in zip(note_elements, measure.notes):
                if note.is_rest or note.pitch is None:
                    continue
                _write_pitch(note_element.find("pitch"), note.pitch)

    for key_element in score_element.iter("key"):
        fifths_element = key_element.find("fifths")
        if fifths_element is not None:
            fifths_element.text = str(fifths)


def serialize_document(original_text: str, root: ET.Element) -> str:
    """
    Serialize a tree read from ``original_text``.

    The XML declaration and DOCTYPE preceding the root element are copied
    from the original text since ElementTree does not keep them.
    """
    body = ET.tostring(root, encoding="unicode")

    match = re.search(rf"<{re.escape(root.tag)}[\s/>]", original_text)
    prolog = original_text[:match.start()] if match else ""

    if original_text.endswith("\n") and not body.endswith("\n"):
        body += "\n"
    return prolog + body


def transpose(
    document_text: str,
    from_key: str,
    to_key: str,
    spelling: Optional[SpellingPolicy] = None,
) -> str:
    """
    Transpose a MusicXML document from one key to another.

    Args:
        document_text: MusicXML score-partwise text
        from_key: Current tonic, e.g. "C"
        to_key: Target tonic, e.g. "D"
        spelling: Enharmonic spelling policy, SpellingPolicy.KEY by default

    Returns:
        Transposed MusicXML text; the input itself when the keys are equal

    Raises:
        InvalidKey: if either key name cannot be read
        MalformedDocument: if the text is not a score-partwise document
    """
    if from_key == to_key:
        return document_text

    semitones = calculate_semitones(from_key, to_key)
    fifths = key_to_fifths(to_key)
    spelling = spelling or SpellingPolicy.KEY
    logger.info(f"Transposing {from_key} -> {to_key} ({semitones} semitones)")

    root = load_document(document_text)
    score_element = find_score_root(root)

    score = MusicXMLParser().parse_root(score_element)
    transposed = transpose_score(score, semitones, to_key, spelling)
    _write_score(score_element, transposed, fifths)

    return serialize_document(document_text, root)
