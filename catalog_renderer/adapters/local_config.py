import json
from pathlib import Path
from typing import Any


class LocalRendererConfigSource:
    """Reads a renderer configuration bundled as a local JSON file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> Any:
        if not self.path.exists():
            raise FileNotFoundError(f"Renderer configuration not found at: {self.path}")

        with open(self.path, encoding="utf-8") as f:
            return json.load(f)

    def describe(self) -> str:
        return str(self.path)
