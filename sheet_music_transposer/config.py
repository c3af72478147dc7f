"""
Configuration module for sheet_music_transposer.

Handles default solfege/transposition settings and export
preferences, persisted as JSON in the user's home directory.
"""

import json
import logging
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class SolfegeConfig:
    """Configuration for solfege annotation."""
    mode: str = "fixed"  # "fixed" or "movable"
    default_key: str = "C"


@dataclass
class TransposeConfig:
    """Configuration for transposition."""
    spelling: str = "key"  # "key", "sharps" or "flats"


@dataclass
class ExportConfig:
    """Configuration for export settings."""
    encoding: str = "utf-8"
    json_indent: int = 2


@dataclass
class Config:
    """
    Main configuration class for sheet_music_transposer.

    Handles loading/saving settings from ~/.sheet_music_transposer.
    """

    # Sub-configurations
    solfege: SolfegeConfig = field(default_factory=SolfegeConfig)
    transpose: TransposeConfig = field(default_factory=TransposeConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    # Application directories
    _config_dir: Path = field(default_factory=lambda: Path.home() / ".sheet_music_transposer")
    _config_file: Path = field(default=None)

    def __post_init__(self):
        """Initialize configuration paths."""
        self._config_dir = Path(self._config_dir)
        if self._config_file is None:
            self._config_file = self._config_dir / "config.json"

    @property
    def config_file(self) -> Path:
        return self._config_file

    def save(self) -> None:
        """Save configuration to disk."""
        data = {
            "solfege": asdict(self.solfege),
            "transpose": asdict(self.transpose),
            "export": asdict(self.export),
        }

        self._config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self._config_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    @classmethod
    def load(cls, config_dir: Optional[Path] = None) -> "Config":
        """Load configuration from disk or create default."""
        config = cls() if config_dir is None else cls(_config_dir=Path(config_dir))

        if config._config_file.exists():
            try:
                with open(config._config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)

                if "solfege" in data:
                    config.solfege = SolfegeConfig(**data["solfege"])
                if "transpose" in data:
                    config.transpose = TransposeConfig(**data["transpose"])
                if "export" in data:
                    config.export = ExportConfig(**data["export"])

            except (json.JSONDecodeError, TypeError, KeyError) as e:
                logger.warning(f"Could not load config file: {e}")

        return config


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = Config()
    _config.save()
