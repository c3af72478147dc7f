"""
Core module for sheet_music_transposer.

Contains the pitch and score models, the MusicXML parser, the solfege
resolver and the transposition engine.
"""

from sheet_music_transposer.core.errors import (
    ScoreError,
    InvalidSpelling,
    MalformedDocument,
    InvalidKey,
)
from sheet_music_transposer.core.pitch import (
    Pitch,
    PitchClass,
    SpellingPolicy,
    to_chromatic_index,
    from_chromatic_index,
    parse_spelling,
    format_spelling,
    parse_pitch,
)
from sheet_music_transposer.core.keys import (
    key_to_fifths,
    fifths_to_key,
    normalize_key_name,
)
from sheet_music_transposer.core.score import (
    Score,
    Part,
    Measure,
    Note,
    Attributes,
    KeySignature,
    TimeSignature,
    Clef,
)
from sheet_music_transposer.core.parser import MusicXMLParser, parse_musicxml
from sheet_music_transposer.core.solfege import (
    SolfegeMode,
    SolfegeAnnotation,
    resolve,
    annotate_score,
    extract_solfege,
)
from sheet_music_transposer.core.transposer import (
    calculate_semitones,
    transpose_pitch,
    transpose_score,
    transpose,
)

__all__ = [
    "ScoreError",
    "InvalidSpelling",
    "MalformedDocument",
    "InvalidKey",
    "Pitch",
    "PitchClass",
    "SpellingPolicy",
    "to_chromatic_index",
    "from_chromatic_index",
    "parse_spelling",
    "format_spelling",
    "parse_pitch",
    "key_to_fifths",
    "fifths_to_key",
    "normalize_key_name",
    "Score",
    "Part",
    "Measure",
    "Note",
    "Attributes",
    "KeySignature",
    "TimeSignature",
    "Clef",
    "MusicXMLParser",
    "parse_musicxml",
    "SolfegeMode",
    "SolfegeAnnotation",
    "resolve",
    "annotate_score",
    "extract_solfege",
    "calculate_semitones",
    "transpose_pitch",
    "transpose_score",
    "transpose",
]
