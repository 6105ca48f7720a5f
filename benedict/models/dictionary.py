from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

@dataclass(frozen=True)
class Dictionary:
    """An installed MDX reference dictionary.

    ``folder`` is relative to the dictionary root; the file names are
    relative to ``folder``.
    """
    id: int
    name: str
    folder: str
    mdx_filename: str
    css_filename: str | None
    cover_filename: str | None
    created_at: str

    def base_dir(self, root: Path) -> Path:
        return (root / self.folder).resolve()

    def mdx_path(self, root: Path) -> Path:
        return root / self.folder / self.mdx_filename
