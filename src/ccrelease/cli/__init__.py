"""Command-line interface for ccrelease."""

from __future__ import annotations

from ccrelease.cli.app import app, main

__all__ = ["app", "main"]
