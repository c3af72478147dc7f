"""
Utility modules for sheet_music_transposer.
"""

from sheet_music_transposer.utils.samples import (
    SAMPLE_MUSICXML,
    create_sample_musicxml,
)

__all__ = [
    "SAMPLE_MUSICXML",
    "create_sample_musicxml",
]
