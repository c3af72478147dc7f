"""
Pitch model - pitch classes, pitches and chromatic-index arithmetic.

A pitch is stored the way MusicXML stores it (step, alter, octave) so that
its spelling survives a round trip. Conversions from a chromatic index back
to a spelled pitch go through music21's pitch naming, which knows how
octave numbers behave around the B/C boundary (B#3 sounds as C4).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Tuple

from music21 import key as m21_key
from music21 import pitch as m21_pitch

from sheet_music_transposer.core.errors import InvalidSpelling


STEPS = ("C", "D", "E", "F", "G", "A", "B")

STEP_SEMITONES = {
    "C": 0,
    "D": 2,
    "E": 4,
    "F": 5,
    "G": 7,
    "A": 9,
    "B": 11,
}

# Chromatic index of C4 is 48; its MIDI number is 60.
MIDI_OFFSET = 12

_PITCH_PATTERN = re.compile(r"^([A-Ga-g][#b]*)(-?\d+)$")


class SpellingPolicy(Enum):
    """How to spell a chromatic index that has several enharmonic names."""
    SHARPS = "sharps"
    FLATS = "flats"
    KEY = "key"  # follow the key signature, fall back to its accidental type

    @classmethod
    def from_name(cls, name: str) -> "SpellingPolicy":
        """Get a policy from its config name, defaulting to KEY."""
        for policy in cls:
            if policy.value == str(name).lower():
                return policy
        return cls.KEY


@dataclass(frozen=True)
class PitchClass:
    """A note name independent of octave, e.g. C, F#, Bb."""

    step: str
    alter: int = 0

    def __post_init__(self):
        if self.step not in STEP_SEMITONES:
            raise InvalidSpelling(str(self.step), "step must be one of A-G")

    @property
    def name(self) -> str:
        """Spelling such as "F#" or "Bb"."""
        return format_spelling(self)

    @property
    def semitone(self) -> int:
        """Position on the 12-tone circle (0-11)."""
        return (STEP_SEMITONES[self.step] + self.alter) % 12

    def is_enharmonic(self, other: "PitchClass") -> bool:
        """True if both spellings sound the same pitch class."""
        return self.semitone == other.semitone

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Pitch:
    """A spelled pitch: step, alteration and octave."""

    step: str
    alter: int = 0
    octave: int = 4

    def __post_init__(self):
        if self.step not in STEP_SEMITONES:
            raise InvalidSpelling(str(self.step), "step must be one of A-G")

    @classmethod
    def parse(cls, text: str) -> "Pitch":
        """Parse text like "C4", "F#5" or "Bb-1"."""
        return parse_pitch(text)

    @classmethod
    def from_chromatic_index(
        cls,
        index: int,
        spelling: SpellingPolicy = SpellingPolicy.SHARPS,
        fifths: int = 0,
    ) -> "Pitch":
        return from_chromatic_index(index, spelling, fifths)

    @property
    def pitch_class(self) -> PitchClass:
        return PitchClass(self.step, self.alter)

    @property
    def name(self) -> str:
        """Spelling with octave, e.g. "F#4"."""
        return f"{format_spelling(self.pitch_class)}{self.octave}"

    @property
    def chromatic_index(self) -> int:
        return to_chromatic_index(self)

    @property
    def midi(self) -> int:
        return self.chromatic_index + MIDI_OFFSET

    def __str__(self) -> str:
        return self.name


def to_chromatic_index(pitch: Pitch) -> int:
    """
    Convert a pitch to its chromatic index.

    Args:
        pitch: Pitch to convert

    Returns:
        Step semitone + alteration + 12 * octave (C4 = 48)
    """
    return STEP_SEMITONES[pitch.step] + pitch.alter + 12 * pitch.octave


@lru_cache(maxsize=512)
def _enharmonic_spellings(index: int) -> Tuple[Pitch, ...]:
    """All common spellings (up to double accidentals) of a chromatic index."""
    ps = index + MIDI_OFFSET
    reference = m21_pitch.Pitch(ps=ps)
    spellings = [reference] + reference.getAllCommonEnharmonics(alterLimit=2)

    result = []
    for p in spellings:
        if round(p.ps) != ps:
            continue
        candidate = Pitch(p.step, int(p.alter), p.implicitOctave)
        if candidate not in result:
            result.append(candidate)
    return tuple(result)


def _prefer_sharps(candidate: Pitch) -> Tuple[int, int]:
    return (abs(candidate.alter), -candidate.alter)


def _prefer_flats(candidate: Pitch) -> Tuple[int, int]:
    return (abs(candidate.alter), candidate.alter)


def from_chromatic_index(
    index: int,
    spelling: SpellingPolicy = SpellingPolicy.SHARPS,
    fifths: int = 0,
) -> Pitch:
    """
    Convert a chromatic index back to a spelled pitch.

    Args:
        index: Chromatic index (C4 = 48)
        spelling: Policy used to choose among enharmonic spellings
        fifths: Key signature consulted by SpellingPolicy.KEY

    Returns:
        Pitch whose chromatic index equals ``index``
    """
    candidates = _enharmonic_spellings(index)

    if spelling == SpellingPolicy.KEY:
        signature = m21_key.KeySignature(fifths)
        for candidate in candidates:
            accidental = signature.accidentalByStep(candidate.step)
            expected = int(accidental.alter) if accidental is not None else 0
            if candidate.alter == expected:
                return candidate
        spelling = SpellingPolicy.SHARPS if fifths >= 0 else SpellingPolicy.FLATS

    if spelling == SpellingPolicy.FLATS:
        return min(candidates, key=_prefer_flats)
    return min(candidates, key=_prefer_sharps)


def parse_spelling(text: str) -> PitchClass:
    """
    Parse a pitch-class spelling.

    The first character is the step (case-insensitive); the rest must be a
    run of '#' (sharps) or 'b' (flats), or nothing.

    Raises:
        InvalidSpelling: if the text is empty or contains anything else
    """
    if not isinstance(text, str) or not text:
        raise InvalidSpelling(str(text), "empty spelling")

    step = text[0].upper()
    if step not in STEP_SEMITONES:
        raise InvalidSpelling(text, f"unknown step {text[0]!r}")

    accidentals = text[1:]
    if not accidentals:
        alter = 0
    elif set(accidentals) == {"#"}:
        alter = len(accidentals)
    elif set(accidentals) == {"b"}:
        alter = -len(accidentals)
    else:
        raise InvalidSpelling(text, "accidentals must be a run of '#' or 'b'")

    return PitchClass(step, alter)


def format_spelling(pitch_class: PitchClass) -> str:
    """Render a pitch class as text, e.g. PitchClass("B", -1) -> "Bb"."""
    if pitch_class.alter > 0:
        return pitch_class.step + "#" * pitch_class.alter
    if pitch_class.alter < 0:
        return pitch_class.step + "b" * -pitch_class.alter
    return pitch_class.step


def parse_pitch(text: str) -> Pitch:
    """
    Parse a pitch with octave, e.g. "C#4".

    Raises:
        InvalidSpelling: if the text is not a spelling followed by an octave
    """
    match = _PITCH_PATTERN.match(text or "")
    if match is None:
        raise InvalidSpelling(str(text), "expected spelling followed by octave")

    pitch_class = parse_spelling(match.group(1))
    return Pitch(pitch_class.step, pitch_class.alter, int(match.group(2)))
