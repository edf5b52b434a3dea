"""container-deck — terminal front-end for the ``container`` CLI.

Shells out to the container-management binary, parses its
column-aligned listings into typed records, and renders them with Rich.
"""

from container_deck.version import __version__

__all__: list[str] = ["__version__"]
