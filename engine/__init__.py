"""Freizeit- und Matching-Engine (reine Berechnungen ohne I/O)."""
