"""
Solfege resolver - map pitches to scale-degree syllables.

Two conventions are supported:
- Fixed do: 도 is always C; altered tones carry a sharp or flat suffix.
- Movable do: 도 is the tonic of the given key; only the seven diatonic
  tones of that key have movable syllables, other tones fall back to the
  fixed-do table.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from types import MappingProxyType
from typing import List, Optional, Union

from sheet_music_transposer.core.errors import InvalidSpelling
from sheet_music_transposer.core.parser import parse_musicxml
from sheet_music_transposer.core.pitch import (
    Pitch,
    PitchClass,
    format_spelling,
    parse_pitch,
    parse_spelling,
)
from sheet_music_transposer.core.score import Score


class SolfegeMode(Enum):
    """Solfege convention."""
    FIXED = "fixed"
    MOVABLE = "movable"

    @classmethod
    def from_name(cls, name: str) -> "SolfegeMode":
        """Get a mode from its config name, defaulting to FIXED."""
        for mode in cls:
            if mode.value == str(name).lower():
                return mode
        return cls.FIXED


SYLLABLES = ("도", "레", "미", "파", "솔", "라", "시")

FIXED_DO = MappingProxyType({
    "C": "도",
    "C#": "도#",
    "Db": "레♭",
    "D": "레",
    "D#": "레#",
    "Eb": "미♭",
    "E": "미",
    "F": "파",
    "F#": "파#",
    "Gb": "솔♭",
    "G": "솔",
    "G#": "솔#",
    "Ab": "라♭",
    "A": "라",
    "A#": "라#",
    "Bb": "시♭",
    "B": "시",
})

# Tonic -> diatonic spelling -> syllable. Sharp tonics need double sharps
# for their upper degrees (e.g. the 7th of D# is C##).
MOVABLE_DO = MappingProxyType({
    tonic: MappingProxyType(dict(zip(scale, SYLLABLES)))
    for tonic, scale in {
        "C": ("C", "D", "E", "F", "G", "A", "B"),
        "C#": ("C#", "D#", "E#", "F#", "G#", "A#", "B#"),
        "D": ("D", "E", "F#", "G", "A", "B", "C#"),
        "D#": ("D#", "E#", "F##", "G#", "A#", "B#", "C##"),
        "E": ("E", "F#", "G#", "A", "B", "C#", "D#"),
        "F": ("F", "G", "A", "Bb", "C", "D", "E"),
        "F#": ("F#", "G#", "A#", "B", "C#", "D#", "E#"),
        "G": ("G", "A", "B", "C", "D", "E", "F#"),
        "G#": ("G#", "A#", "B#", "C#", "D#", "E#", "F##"),
        "A": ("A", "B", "C#", "D", "E", "F#", "G#"),
        "A#": ("A#", "B#", "C##", "D#", "E#", "F##", "G##"),
        "B": ("B", "C#", "D#", "E", "F#", "G#", "A#"),
        "Bb": ("Bb", "C", "D", "Eb", "F", "G", "A"),
        "Eb": ("Eb", "F", "G", "Ab", "Bb", "C", "D"),
        "Ab": ("Ab", "Bb", "C", "Db", "Eb", "F", "G"),
        "Db": ("Db", "Eb", "F", "Gb", "Ab", "Bb", "C"),
        "Gb": ("Gb", "Ab", "Bb", "Cb", "Db", "Eb", "F"),
    }.items()
})


@dataclass(frozen=True)
class SolfegeAnnotation:
    """Syllable for one note of a score, for display next to the note."""

    part_id: str
    measure_number: int
    note_index: int  # position within the measure, rests included
    pitch_name: str  # e.g. "F#4"
    syllable: str
    step: str
    octave: int

    def to_dict(self) -> dict:
        return asdict(self)


def _spelling_of(pitch: Union[Pitch, PitchClass, str]) -> Optional[str]:
    """Pitch-class spelling of a pitch, pitch class or text; None if unreadable."""
    if isinstance(pitch, Pitch):
        return format_spelling(pitch.pitch_class)
    if isinstance(pitch, PitchClass):
        return format_spelling(pitch)

    try:
        return format_spelling(parse_pitch(pitch).pitch_class)
    except (InvalidSpelling, TypeError):
        pass
    try:
        return format_spelling(parse_spelling(pitch))
    except InvalidSpelling:
        return None


def resolve(
    pitch: Union[Pitch, PitchClass, str],
    key: str = "C",
    mode: SolfegeMode = SolfegeMode.FIXED,
) -> str:
    """
    Get the solfege syllable of a pitch.

    Args:
        pitch: Pitch, PitchClass or text like "C#4" / "Bb"
        key: Tonic of the key, used by movable do
        mode: SolfegeMode.FIXED or SolfegeMode.MOVABLE

    Returns:
        Syllable such as "솔" or "도#"; empty string when the spelling has
        no syllable (e.g. double sharps in fixed do)
    """
    spelling = _spelling_of(pitch)
    if spelling is None:
        return ""

    if mode == SolfegeMode.MOVABLE and key in MOVABLE_DO:
        syllable = MOVABLE_DO[key].get(spelling)
        if syllable:
            return syllable

    return FIXED_DO.get(spelling, "")


def annotate_score(
    score: Score,
    key: str = "C",
    mode: SolfegeMode = SolfegeMode.FIXED,
) -> List[SolfegeAnnotation]:
    """
    Resolve a syllable for every pitched note of a score.

    Rests and notes without a readable pitch are skipped.

    Returns:
        Annotations in document order
    """
    annotations = []
    for part, measure, index, note in score.iter_notes():
        if note.is_rest or note.pitch is None:
            continue
        annotations.append(SolfegeAnnotation(
            part_id=part.id,
            measure_number=measure.number,
            note_index=index,
            pitch_name=note.pitch.name,
            syllable=resolve(note.pitch, key, mode),
            step=note.pitch.step,
            octave=note.pitch.octave,
        ))
    return annotations


def extract_solfege(
    document_text: str,
    key: str = "C",
    mode: SolfegeMode = SolfegeMode.FIXED,
) -> List[SolfegeAnnotation]:
    """Parse MusicXML text and annotate it; see annotate_score."""
    return annotate_score(parse_musicxml(document_text), key, mode)


def get_supported_keys() -> List[str]:
    """Tonics with a movable-do table."""
    return list(MOVABLE_DO)
