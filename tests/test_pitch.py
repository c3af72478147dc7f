"""
Tests for the pitch model.
"""

import pytest

from sheet_music_transposer.core.errors import InvalidSpelling
from sheet_music_transposer.core.pitch import (
    Pitch,
    PitchClass,
    SpellingPolicy,
    format_spelling,
    from_chromatic_index,
    parse_pitch,
    parse_spelling,
    to_chromatic_index,
)


class TestChromaticIndex:
    """Tests for pitch -> chromatic index conversion."""

    def test_naturals(self):
        """Test step semitones plus 12 per octave."""
        assert to_chromatic_index(Pitch("C", 0, 4)) == 48
        assert to_chromatic_index(Pitch("D", 0, 4)) == 50
        assert to_chromatic_index(Pitch("B", 0, 4)) == 59
        assert to_chromatic_index(Pitch("C", 0, 0)) == 0

    def test_alterations(self):
        """Test that alter is added to the index."""
        assert Pitch("F", 1, 4).chromatic_index == 54
        assert Pitch("B", -1, 3).chromatic_index == 46
        assert Pitch("D", -2, 4).chromatic_index == 48

    def test_octave_wraparound(self):
        """Test that B#3 and Cb4 sit on either side of the octave line."""
        assert Pitch("B", 1, 3).chromatic_index == Pitch("C", 0, 4).chromatic_index
        assert Pitch("C", -1, 4).chromatic_index == Pitch("B", 0, 3).chromatic_index

    def test_midi(self):
        """Test the MIDI number is offset by one octave."""
        assert Pitch("C", 0, 4).midi == 60
        assert Pitch("A", 0, 4).midi == 69


class TestFromChromaticIndex:
    """Tests for chromatic index -> pitch conversion."""

    def test_default_spelling_is_sharps(self):
        """Test the default policy prefers naturals, then sharps."""
        assert from_chromatic_index(48) == Pitch("C", 0, 4)
        assert from_chromatic_index(49) == Pitch("C", 1, 4)
        assert from_chromatic_index(58) == Pitch("A", 1, 4)

    def test_flats(self):
        """Test the flat policy."""
        assert from_chromatic_index(49, SpellingPolicy.FLATS) == Pitch("D", -1, 4)
        assert from_chromatic_index(58, SpellingPolicy.FLATS) == Pitch("B", -1, 4)
        assert from_chromatic_index(52, SpellingPolicy.FLATS) == Pitch("E", 0, 4)

    def test_key_spelling_diatonic(self):
        """Test that KEY follows the key signature."""
        # D major: F#
        assert from_chromatic_index(54, SpellingPolicy.KEY, 2) == Pitch("F", 1, 4)
        # Bb major: Eb
        assert from_chromatic_index(51, SpellingPolicy.KEY, -2) == Pitch("E", -1, 4)

    def test_key_spelling_crosses_octave(self):
        """Test key spellings that change the octave number."""
        # C# major spells C4 as B#3
        assert from_chromatic_index(48, SpellingPolicy.KEY, 7) == Pitch("B", 1, 3)
        # Gb major spells B3 as Cb4
        assert from_chromatic_index(47, SpellingPolicy.KEY, -6) == Pitch("C", -1, 4)

    def test_key_spelling_chromatic_fallback(self):
        """Test non-diatonic tones use the key's accidental type."""
        assert from_chromatic_index(51, SpellingPolicy.KEY, 2) == Pitch("D", 1, 4)
        assert from_chromatic_index(51, SpellingPolicy.KEY, -1) == Pitch("E", -1, 4)
        assert from_chromatic_index(49, SpellingPolicy.KEY, 0) == Pitch("C", 1, 4)

    def test_round_trip_index(self):
        """Test every policy keeps the chromatic index."""
        for index in range(36, 72):
            for policy in SpellingPolicy:
                for fifths in (-7, -3, 0, 4, 7):
                    pitch = from_chromatic_index(index, policy, fifths)
                    assert pitch.chromatic_index == index

    def test_classmethod(self):
        """Test Pitch.from_chromatic_index delegates to the function."""
        assert Pitch.from_chromatic_index(61, SpellingPolicy.FLATS) == Pitch("D", -1, 5)


class TestSpelling:
    """Tests for parsing and formatting pitch-class spellings."""

    def test_parse_naturals(self):
        """Test parsing plain steps."""
        assert parse_spelling("C") == PitchClass("C", 0)
        assert parse_spelling("g") == PitchClass("G", 0)

    def test_parse_accidentals(self):
        """Test sharps and flats of any count."""
        assert parse_spelling("F#") == PitchClass("F", 1)
        assert parse_spelling("Bb") == PitchClass("B", -1)
        assert parse_spelling("C##") == PitchClass("C", 2)
        assert parse_spelling("ebb") == PitchClass("E", -2)
        assert parse_spelling("bb") == PitchClass("B", -1)

    @pytest.mark.parametrize("text", ["", "H", "C#b", "Cx", "C 4", "#C", "Db4"])
    def test_parse_invalid(self, text):
        """Test that malformed spellings raise InvalidSpelling."""
        with pytest.raises(InvalidSpelling):
            parse_spelling(text)

    def test_invalid_spelling_is_value_error(self):
        """Test callers can catch ValueError."""
        with pytest.raises(ValueError):
            parse_spelling("X")

    def test_format(self):
        """Test rendering spellings."""
        assert format_spelling(PitchClass("C", 0)) == "C"
        assert format_spelling(PitchClass("F", 1)) == "F#"
        assert format_spelling(PitchClass("A", -2)) == "Abb"
        assert PitchClass("G", 2).name == "G##"

    def test_format_parse_inverse(self):
        """Test that format and parse are inverses."""
        for text in ["C", "C#", "Db", "F##", "Gbb", "B"]:
            assert format_spelling(parse_spelling(text)) == text

    def test_enharmonic(self):
        """Test enharmonic equivalence by pitch class."""
        assert PitchClass("D", 1).is_enharmonic(PitchClass("E", -1))
        assert PitchClass("B", 1).is_enharmonic(PitchClass("C", 0))
        assert not PitchClass("D", 1).is_enharmonic(PitchClass("D", 0))
        assert PitchClass("D", 1) != PitchClass("E", -1)

    def test_invalid_step(self):
        """Test constructing a pitch class with a bad step."""
        with pytest.raises(InvalidSpelling):
            PitchClass("H", 0)


class TestParsePitch:
    """Tests for pitch text with octave."""

    def test_parse(self):
        """Test parsing pitch names."""
        assert parse_pitch("C4") == Pitch("C", 0, 4)
        assert parse_pitch("F#5") == Pitch("F", 1, 5)
        assert parse_pitch("Bb-1") == Pitch("B", -1, -1)
        assert Pitch.parse("eb3") == Pitch("E", -1, 3)

    def test_name(self):
        """Test pitch names include the octave."""
        assert Pitch("F", 1, 4).name == "F#4"
        assert str(Pitch("B", -1, 3)) == "Bb3"

    @pytest.mark.parametrize("text", ["", "C", "4", "H4", "C#b4", "C4.5"])
    def test_parse_invalid(self, text):
        """Test malformed pitch names."""
        with pytest.raises(InvalidSpelling):
            parse_pitch(text)

    def test_pitch_is_immutable(self):
        """Test that pitches cannot be modified."""
        pitch = Pitch("C", 0, 4)
        with pytest.raises(AttributeError):
            pitch.octave = 5


class TestSpellingPolicy:
    """Tests for SpellingPolicy lookup."""

    def test_from_name(self):
        assert SpellingPolicy.from_name("flats") == SpellingPolicy.FLATS
        assert SpellingPolicy.from_name("SHARPS") == SpellingPolicy.SHARPS
        assert SpellingPolicy.from_name("unknown") == SpellingPolicy.KEY
