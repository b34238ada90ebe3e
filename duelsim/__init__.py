"""Duelsim - duel resolution engine for tactical shooter balance simulation."""

__version__ = "1.0.0"
