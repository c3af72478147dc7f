"""
Score model - an immutable view of a MusicXML score-partwise document.

Score -> Part -> Measure -> Note, each parent owning its children as
tuples. Instances are produced by the parser and never modified in place;
transposition builds new instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

from sheet_music_transposer.core.keys import fifths_to_key
from sheet_music_transposer.core.pitch import Pitch


@dataclass(frozen=True)
class KeySignature:
    """Key signature as MusicXML encodes it."""

    fifths: int = 0
    mode: str = "major"

    @property
    def tonic(self) -> str:
        """Tonic name, e.g. "D" for fifths=2 major."""
        return fifths_to_key(self.fifths, self.mode)

    def __str__(self) -> str:
        return f"{self.tonic} {self.mode}"


@dataclass(frozen=True)
class TimeSignature:
    """Time signature."""

    beats: int = 4
    beat_type: int = 4

    @property
    def ratio_string(self) -> str:
        return f"{self.beats}/{self.beat_type}"


@dataclass(frozen=True)
class Clef:
    sign: Optional[str] = None
    line: Optional[int] = None


@dataclass(frozen=True)
class Attributes:
    """
    Measure attributes.

    Each field is None when the measure's attributes element does not
    carry it; values are not inherited from earlier measures.
    """

    divisions: Optional[int] = None
    key: Optional[KeySignature] = None
    time: Optional[TimeSignature] = None
    clef: Optional[Clef] = None


@dataclass(frozen=True)
class Note:
    """A single note or rest."""

    duration: int = 0
    type: Optional[str] = None  # "quarter", "half", etc.
    is_rest: bool = False
    pitch: Optional[Pitch] = None

    @property
    def pitch_name(self) -> Optional[str]:
        return self.pitch.name if self.pitch is not None else None


@dataclass(frozen=True)
class Measure:
    """A measure of one part."""

    number: int
    notes: Tuple[Note, ...] = field(default_factory=tuple)
    attributes: Optional[Attributes] = None


@dataclass(frozen=True)
class Part:
    """A part/instrument."""

    id: str
    name: str
    measures: Tuple[Measure, ...] = field(default_factory=tuple)

    def measure(self, number: int) -> Optional[Measure]:
        """First measure with the given number, or None."""
        for measure in self.measures:
            if measure.number == number:
                return measure
        return None


@dataclass(frozen=True)
class Score:
    """
    Root of the score model.

    Provides simplified access to:
    - Metadata (title, composer)
    - The key and time signature declared at the start of the score
    - Iteration over notes for annotation
    """

    title: str = "Untitled"
    composer: str = "Unknown"
    parts: Tuple[Part, ...] = field(default_factory=tuple)

    @classmethod
    def from_musicxml(cls, filepath: Union[str, Path]) -> "Score":
        """
        Load a score from a MusicXML file.

        Args:
            filepath: Path to MusicXML file (.xml, .musicxml)

        Returns:
            Score object
        """
        from sheet_music_transposer.core.parser import parse_musicxml_file

        return parse_musicxml_file(filepath)

    @classmethod
    def from_musicxml_string(cls, text: str) -> "Score":
        """Parse a score from MusicXML text."""
        from sheet_music_transposer.core.parser import parse_musicxml

        return parse_musicxml(text)

    @property
    def num_parts(self) -> int:
        return len(self.parts)

    @property
    def num_measures(self) -> int:
        """Get number of measures (from first part)."""
        if self.parts:
            return len(self.parts[0].measures)
        return 0

    def _first_attributes(self) -> Optional[Attributes]:
        if not self.parts or not self.parts[0].measures:
            return None
        return self.parts[0].measures[0].attributes

    @property
    def key_signature(self) -> KeySignature:
        """Key of the first measure of the first part, C major if absent."""
        attributes = self._first_attributes()
        if attributes is None or attributes.key is None:
            return KeySignature()
        return attributes.key

    @property
    def time_signature(self) -> TimeSignature:
        """Time of the first measure of the first part, 4/4 if absent."""
        attributes = self._first_attributes()
        if attributes is None or attributes.time is None:
            return TimeSignature()
        return attributes.time

    def iter_notes(self) -> Iterator[Tuple[Part, Measure, int, Note]]:
        """
        Iterate over all notes in the score, rests included.

        Yields:
            (part, measure, index of the note within the measure, note)
        """
        for part in self.parts:
            for measure in part.measures:
                for index, note in enumerate(measure.notes):
                    yield part, measure, index, note

    def get_notes_in_measure(
        self,
        part_index: int,
        measure_number: int
    ) -> Tuple[Note, ...]:
        """
        Get all notes in a specific measure.

        Args:
            part_index: Index of the part
            measure_number: Measure number (1-based)

        Returns:
            The measure's notes, empty if the part or measure is missing
        """
        if not 0 <= part_index < len(self.parts):
            return ()

        measure = self.parts[part_index].measure(measure_number)
        if measure is None:
            return ()
        return measure.notes

    def __str__(self) -> str:
        return f"Score('{self.title}', {self.num_parts} parts, {self.num_measures} measures)"
