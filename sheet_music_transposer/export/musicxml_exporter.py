"""
MusicXML Exporter - Write MusicXML documents to disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union, Optional
from dataclasses import dataclass
import logging

from sheet_music_transposer.core.parser import find_score_root, load_document

logger = logging.getLogger(__name__)


@dataclass
class MusicXMLExportOptions:
    """Options for MusicXML export."""

    encoding: str = "utf-8"
    validate: bool = True  # Refuse text that is not a score-partwise document


class MusicXMLExporter:
    """
    Export MusicXML document text (e.g. a transposed score) to a file.

    Compressed .mxl output is not supported; other suffixes are
    replaced with .musicxml.
    """

    def __init__(self, options: Optional[MusicXMLExportOptions] = None):
        """
        Initialize MusicXML exporter.

        Args:
            options: Export options, or None for defaults
        """
        self.options = options or MusicXMLExportOptions()

    def export(
        self,
        document_text: str,
        output_path: Union[str, Path]
    ) -> Path:
        """
        Write MusicXML text to a file.

        Args:
            document_text: MusicXML score-partwise text
            output_path: Output file path

        Returns:
            Path to created MusicXML file

        Raises:
            MalformedDocument: if validation is enabled and the text
                is not a score-partwise document
        """
        output_path = Path(output_path)

        if output_path.suffix.lower() not in self.get_supported_extensions():
            output_path = output_path.with_suffix('.musicxml')

        if self.options.validate:
            find_score_root(load_document(document_text))

        # Create output directory if needed
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(document_text, encoding=self.options.encoding)

        logger.info(f"Exported MusicXML to: {output_path}")
        return output_path

    @staticmethod
    def get_supported_extensions() -> list:
        """Get list of supported file extensions."""
        return [".musicxml", ".xml"]
