"""Datenhaltung, Registrierung, Gruppen, Import und Testdaten."""
