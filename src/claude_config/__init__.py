"""Installer for shared CLAUDE.md guidelines and skills."""

__version__ = "0.1.0"
