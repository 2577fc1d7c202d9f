"""Shared type aliases used across debtwise."""

from pathlib import Path

PathLike = str | Path
