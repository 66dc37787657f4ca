"""RIFF/WAVE container reading and writing."""
