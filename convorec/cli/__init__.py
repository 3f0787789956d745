"""convorec CLI.

Registers all commands on the main group.
"""

from convorec.cli.main import cli
from convorec.cli.replay import replay

__all__ = ["cli", "replay"]
