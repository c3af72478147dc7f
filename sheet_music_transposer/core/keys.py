"""
Key names and key signatures.

Keys are named by their tonic spelling ("C", "F#", "Bb") when they are
passed to the solfege and transposition code, and by a signed fifths count
plus mode inside MusicXML. This module maps between the two.
"""

from __future__ import annotations

from typing import List

from music21 import key as m21_key

from sheet_music_transposer.core.errors import InvalidKey, InvalidSpelling
from sheet_music_transposer.core.pitch import Pitch, parse_spelling


# Major keys of the circle of fifths.
KEY_FIFTHS = {
    "Cb": -7,
    "Gb": -6,
    "Db": -5,
    "Ab": -4,
    "Eb": -3,
    "Bb": -2,
    "F": -1,
    "C": 0,
    "G": 1,
    "D": 2,
    "A": 3,
    "E": 4,
    "B": 5,
    "F#": 6,
    "C#": 7,
}

# Sharp tonics without a key signature of their own.
KEY_ENHARMONICS = {
    "A#": "Bb",
    "D#": "Eb",
    "G#": "Ab",
}

# Octave used when a key name has to be turned into a pitch.
REFERENCE_OCTAVE = 4

MIN_FIFTHS = -7
MAX_FIFTHS = 7


def normalize_key_name(key_name: str) -> str:
    """Map sharp tonics with no key signature to their flat equivalents."""
    return KEY_ENHARMONICS.get(key_name, key_name)


def key_to_fifths(key_name: str) -> int:
    """
    Get the key-signature fifths value for a major key.

    Args:
        key_name: Tonic name like "G", "F#" or "D#"

    Returns:
        Fifths in -7..7; 0 when the key is not in the table
    """
    return KEY_FIFTHS.get(normalize_key_name(key_name), 0)


def fifths_to_key(fifths: int, mode: str = "major") -> str:
    """
    Get the tonic name for a key signature.

    Args:
        fifths: Signed count of sharps (positive) or flats (negative)
        mode: "major" or "minor"

    Returns:
        Tonic spelling like "D" or "Bb"
    """
    fifths = clamp_fifths(fifths)
    mode = "minor" if str(mode).lower() == "minor" else "major"
    tonic = m21_key.KeySignature(fifths).asKey(mode).tonic
    return tonic.name.replace("-", "b")


def clamp_fifths(fifths: int) -> int:
    """Limit a fifths value to the -7..7 range MusicXML key signatures use."""
    return max(MIN_FIFTHS, min(MAX_FIFTHS, fifths))


def key_tonic(key_name: str) -> Pitch:
    """
    Resolve a key name to its tonic pitch at the reference octave.

    Raises:
        InvalidKey: if the name is not a valid pitch-class spelling
    """
    try:
        pitch_class = parse_spelling(key_name)
    except InvalidSpelling as e:
        raise InvalidKey(str(key_name)) from e
    return Pitch(pitch_class.step, pitch_class.alter, REFERENCE_OCTAVE)


def get_key_names() -> List[str]:
    """Key names with a signature, ordered by fifths."""
    return sorted(KEY_FIFTHS, key=KEY_FIFTHS.get)
