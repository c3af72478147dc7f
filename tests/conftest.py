"""
Shared fixtures for sheet_music_transposer tests.
"""

import xml.etree.ElementTree as ET

import pytest

from sheet_music_transposer import config as config_module
from sheet_music_transposer.config import Config
from sheet_music_transposer.utils.samples import SAMPLE_MUSICXML


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's ~/.sheet_music_transposer."""
    config = Config(_config_dir=tmp_path / "config")
    monkeypatch.setattr(config_module, "_config", config)
    return config


@pytest.fixture
def sample_xml():
    return SAMPLE_MUSICXML


@pytest.fixture
def sample_score(sample_xml):
    from sheet_music_transposer.core.parser import parse_musicxml

    return parse_musicxml(sample_xml)


def make_score_xml(
    measures: str, key_fifths: int = 0, extra_parts: str = "", mode: str = "major"
) -> str:
    """Wrap measure markup in a minimal one-part score-partwise document."""
    return f'''<?xml version="1.0" encoding="UTF-8"?>
<score-partwise version="3.1">
  <part-list>
    <score-part id="P1">
      <part-name>Piano</part-name>
    </score-part>
  </part-list>
  <part id="P1">
    <measure number="1">
      <attributes>
        <divisions>1</divisions>
        <key>
          <fifths>{key_fifths}</fifths>
          <mode>{mode}</mode>
        </key>
      </attributes>
    </measure>
{measures}
  </part>
{extra_parts}
</score-partwise>
'''


def note_xml(step: str, octave: int, alter: int = None) -> str:
    alter_xml = f"<alter>{alter}</alter>" if alter is not None else ""
    return (
        f"<note><pitch><step>{step}</step>{alter_xml}<octave>{octave}</octave></pitch>"
        f"<duration>1</duration><type>quarter</type></note>"
    )


REST_XML = "<note><rest/><duration>1</duration><type>quarter</type></note>"


def pitch_elements(document_text: str):
    """All pitch elements of a document, in document order."""
    root = ET.fromstring(document_text)
    return [note.find("pitch") for note in root.iter("note") if note.find("pitch") is not None]
