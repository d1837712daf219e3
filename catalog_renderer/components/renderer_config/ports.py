"""
Renderer configuration port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol


class RendererConfigSource(Protocol):
    """Port for retrieving the renderer configuration document."""

    def load(self) -> Any:
        """
        Return the decoded JSON document.

        Raises OSError if the source cannot be read, ValueError if the
        content is not valid JSON.
        """
        ...

    def describe(self) -> str:
        """Human-readable source location for logs."""
        ...
