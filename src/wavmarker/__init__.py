"""wav-marker — embed podcast chapter markers into WAVE files."""

__version__ = "0.3.0"
