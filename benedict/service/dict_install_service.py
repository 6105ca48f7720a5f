from __future__ import annotations

import io
import logging
import re
import shutil
import uuid
import zipfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from benedict.config import settings
from benedict.data.dict_repo import DictRepo
from benedict.models.dictionary import Dictionary
from benedict.service.mdx_service import clear_caches

LOG = logging.getLogger("benedict")

_IMAGE_GLOBS = ("*.png", "*.jpg", "*.jpeg", "*.webp", "*.gif")

class DictInstallError(Exception): pass

def _safe_name(name: str) -> str:
    name = re.sub(r"[^a-zA-Z0-9._-]+", "_", name.strip())
    return name[:80] or "dictionary"

def _find_cover(target_dir: Path) -> Optional[Path]:
    images = [p for ext in _IMAGE_GLOBS for p in target_dir.rglob(ext)]
    for cand in images:
        if cand.name.lower().startswith(("cover", "icon", "logo")):
            return cand
    return images[0] if images else None

class DictInstallService:
    """Installs MDX dictionaries (zip of .mdx plus optional .mdd/.css/images)."""

    def __init__(self, dict_repo: DictRepo, dict_root: Optional[Path] = None):
        self.dict_repo = dict_repo
        self.dict_root = dict_root or settings.DICT_ROOT

    def install_from_zip_bytes(self, name: str, zip_bytes: bytes) -> Dictionary:
        name = name.strip()
        if len(name) < 2:
            raise DictInstallError("Dictionary name is too short.")
        if any(d.name == name for d in self.dict_repo.list_dicts()):
            raise DictInstallError("A dictionary with this name is already installed.")

        stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        # Names made only of non-ASCII letters all reduce to "_", so the
        # timestamp alone cannot keep folders apart.
        folder_name = f"{_safe_name(name)}_{stamp}_{uuid.uuid4().hex[:8]}"
        target_dir = self.dict_root / folder_name
        target_dir.mkdir(parents=True, exist_ok=False)

        try:
            try:
                z = zipfile.ZipFile(io.BytesIO(zip_bytes), "r")
            except zipfile.BadZipFile as exc:
                raise DictInstallError("Upload is not a valid ZIP file.") from exc
            with z:
                for member in z.namelist():
                    if Path(member).is_absolute() or ".." in Path(member).parts:
                        raise DictInstallError("ZIP contains unsafe paths.")
                z.extractall(target_dir)

            mdx_files = list(target_dir.rglob("*.mdx"))
            if len(mdx_files) != 1:
                raise DictInstallError("ZIP must contain exactly one .mdx file.")
            mdx_path = mdx_files[0]

            css_files = list(target_dir.rglob("*.css"))
            css_path = css_files[0] if css_files else None
            cover_path = _find_cover(target_dir)

            d = self.dict_repo.create(
                name,
                folder_name,
                mdx_path.relative_to(target_dir).as_posix(),
                css_path.relative_to(target_dir).as_posix() if css_path else None,
                cover_path.relative_to(target_dir).as_posix() if cover_path else None,
            )
        except Exception:
            shutil.rmtree(target_dir, ignore_errors=True)
            raise

        LOG.info("Installed dictionary %s (%s)", d.name, d.mdx_filename)
        return d

    def delete_dictionary(self, dict_id: int) -> None:
        d = self.dict_repo.get_by_id(dict_id)
        if not d:
            return
        shutil.rmtree(self.dict_root / d.folder, ignore_errors=True)
        self.dict_repo.delete(dict_id)
        clear_caches()
        LOG.info("Removed dictionary %s", d.name)
