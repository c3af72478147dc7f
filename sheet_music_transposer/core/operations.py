"""
Music operations module.

Provides high-level functions that combine the parser, solfege resolver
and transposition engine with the user's configuration.
"""

from typing import List, Optional

from sheet_music_transposer.config import get_config
from sheet_music_transposer.core.keys import fifths_to_key, get_key_names
from sheet_music_transposer.core.parser import parse_musicxml
from sheet_music_transposer.core.pitch import (
    SpellingPolicy,
    from_chromatic_index,
    parse_pitch,
)
from sheet_music_transposer.core.score import Score
from sheet_music_transposer.core.solfege import (
    SolfegeAnnotation,
    SolfegeMode,
    annotate_score,
)
from sheet_music_transposer.core.transposer import transpose


def detect_key(score: Score) -> str:
    """
    Get the major-key tonic of a score's first key signature.

    Transposition rewrites key signatures from the major-key fifths table,
    so a minor signature is reported by its relative major (A minor -> "C").

    Args:
        score: Score to inspect

    Returns:
        Tonic name like "C" or "Bb"; "C" when the score declares no key
    """
    return fifths_to_key(score.key_signature.fifths)


def transpose_document(
    document_text: str,
    to_key: str,
    from_key: Optional[str] = None,
) -> str:
    """
    Transpose MusicXML text to another key.

    Args:
        document_text: MusicXML score-partwise text
        to_key: Target tonic
        from_key: Current tonic, detected from the document if None

    Returns:
        Transposed MusicXML text
    """
    if from_key is None:
        from_key = detect_key(parse_musicxml(document_text))

    spelling = SpellingPolicy.from_name(get_config().transpose.spelling)
    return transpose(document_text, from_key, to_key, spelling)


def annotate_document(
    document_text: str,
    key: Optional[str] = None,
    mode: Optional[SolfegeMode] = None,
) -> List[SolfegeAnnotation]:
    """
    Resolve solfege syllables for every note of MusicXML text.

    Args:
        document_text: MusicXML score-partwise text
        key: Tonic for movable do; detected from the document if None
        mode: Solfege convention; the configured mode if None

    Returns:
        Annotations in document order
    """
    score = parse_musicxml(document_text)
    config = get_config()

    if mode is None:
        mode = SolfegeMode.from_name(config.solfege.mode)
    if key is None:
        key = detect_key(score) if score.parts else config.solfege.default_key

    return annotate_score(score, key, mode)


def get_available_keys() -> List[str]:
    """
    Get list of key names that have a key signature.

    Returns:
        Key names from Cb (7 flats) to C# (7 sharps)
    """
    return get_key_names()


def get_solfege_modes() -> List[str]:
    """Get the names of the supported solfege conventions."""
    return [mode.value for mode in SolfegeMode]


def pitch_to_chromatic(pitch_name: str) -> int:
    """
    Convert pitch name to chromatic index.

    Args:
        pitch_name: Pitch like "C4", "F#5"

    Returns:
        Chromatic index (C4 = 48)
    """
    return parse_pitch(pitch_name).chromatic_index


def chromatic_to_pitch(
    index: int,
    spelling: SpellingPolicy = SpellingPolicy.SHARPS
) -> str:
    """
    Convert chromatic index to pitch name.

    Args:
        index: Chromatic index (C4 = 48)
        spelling: Enharmonic spelling policy

    Returns:
        Pitch name like "C4" or "F#4"
    """
    return from_chromatic_index(index, spelling).name
