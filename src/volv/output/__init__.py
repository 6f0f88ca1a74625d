"""Reporters — artifact serialization and terminal output."""
