"""Tests for mutalyzer-ld."""
from pathlib import Path

this_directory = Path(__file__).resolve().parent
INPUT_DIR = this_directory / "input"
