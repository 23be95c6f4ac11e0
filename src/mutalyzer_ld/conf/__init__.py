"""Package data: Turtle templates."""
from pathlib import Path

TEMPLATES_DIR = Path(__file__).parent / "templates"
