"""
Export module for sheet_music_transposer.

Provides exporters for:
- MusicXML documents
- Solfege annotations (JSON, CSV)
"""

from sheet_music_transposer.export.musicxml_exporter import MusicXMLExporter
from sheet_music_transposer.export.solfege_exporter import SolfegeExporter

__all__ = ["MusicXMLExporter", "SolfegeExporter"]
