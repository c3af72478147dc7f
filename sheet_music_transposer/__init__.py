"""
sheet_music_transposer - MusicXML solfege and transposition

Parses MusicXML scores into a structured model, annotates notes with
solfege syllables (fixed or movable do) and transposes scores to another
key with correct enharmonic spelling.
"""

__version__ = "1.0.0"

from sheet_music_transposer.core.score import Score
from sheet_music_transposer.core.parser import parse_musicxml
from sheet_music_transposer.core.solfege import resolve
from sheet_music_transposer.core.transposer import transpose
from sheet_music_transposer.config import Config

__all__ = ["Score", "Config", "parse_musicxml", "resolve", "transpose", "__version__"]
