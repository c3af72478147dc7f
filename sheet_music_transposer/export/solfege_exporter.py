"""
Solfege Exporter - Write solfege annotations for a renderer.
"""

from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import List, Optional, Sequence, Union

from sheet_music_transposer.core.solfege import SolfegeAnnotation

logger = logging.getLogger(__name__)


@dataclass
class SolfegeExportOptions:
    """Options for solfege export."""

    format: Optional[str] = None  # "json" or "csv"; None = from file suffix
    encoding: str = "utf-8"
    json_indent: int = 2


class SolfegeExporter:
    """
    Export a list of SolfegeAnnotation records.

    JSON output is a list of objects with the annotation's field names;
    CSV output has one header row and one row per note.
    """

    def __init__(self, options: Optional[SolfegeExportOptions] = None):
        self.options = options or SolfegeExportOptions()

    def _resolve_format(self, output_path: Path) -> str:
        if self.options.format:
            return self.options.format.lower()
        if output_path.suffix.lower() == ".csv":
            return "csv"
        return "json"

    def export(
        self,
        annotations: Sequence[SolfegeAnnotation],
        output_path: Union[str, Path]
    ) -> Path:
        """
        Write annotations to a file.

        Args:
            annotations: Annotations in document order
            output_path: Output file path

        Returns:
            Path to created file
        """
        output_path = Path(output_path)
        format_type = self._resolve_format(output_path)
        if format_type not in ("json", "csv"):
            raise ValueError(f"Unsupported solfege export format: {format_type}")

        output_path.parent.mkdir(parents=True, exist_ok=True)

        if format_type == "csv":
            with open(output_path, "w", newline="", encoding=self.options.encoding) as f:
                writer = csv.DictWriter(f, fieldnames=self.get_field_names())
                writer.writeheader()
                for annotation in annotations:
                    writer.writerow(annotation.to_dict())
        else:
            output_path.write_text(
                self.export_to_string(annotations),
                encoding=self.options.encoding,
            )

        logger.info(f"Exported {len(annotations)} solfege annotations to: {output_path}")
        return output_path

    def export_to_string(self, annotations: Sequence[SolfegeAnnotation]) -> str:
        """Serialize annotations as a JSON array."""
        return json.dumps(
            [annotation.to_dict() for annotation in annotations],
            ensure_ascii=False,
            indent=self.options.json_indent,
        )

    @staticmethod
    def get_field_names() -> List[str]:
        return [f.name for f in fields(SolfegeAnnotation)]
