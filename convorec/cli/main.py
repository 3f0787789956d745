"""Main CLI command group for convorec."""

from __future__ import annotations

import click

import convorec


@click.group()
@click.version_option(version=convorec.__version__, prog_name="convorec")
def cli() -> None:
    """convorec: conversation audio recorder (local + remote PCM16 to WAV)."""
