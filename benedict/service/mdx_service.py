from __future__ import annotations

import logging
import mimetypes
import re
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import quote, unquote

from readmdict import MDD, MDX

from benedict.config import settings
from benedict.data.dict_repo import DictRepo
from benedict.models.dictionary import Dictionary
from benedict.models.lookup import DefinitionView, EntryResult

LOG = logging.getLogger("benedict")


class DictLookupError(Exception):
    pass


class MdxService:
    """Reference dictionary backed by every installed MDX file.

    Serves both sides of the lookup: the existence check used before a term
    is accepted, and the rendered definition shown afterwards.
    """

    def __init__(self, dict_repo: DictRepo, dict_root: Optional[Path] = None):
        self.dict_repo = dict_repo
        self.dict_root = dict_root or settings.DICT_ROOT

    def list_dicts(self) -> list[Dictionary]:
        return self.dict_repo.list_dicts()

    # ----------------------------
    # Existence check
    # ----------------------------
    def has_definition(self, term: str) -> bool:
        """Exact, case-sensitive match against any installed dictionary.

        A dictionary that cannot be read counts as not having the term.
        """
        if not term:
            return False
        for d in self.list_dicts():
            maps = self._maps_for(d)
            if maps and maps[0].get(term):
                return True
        return False

    def warm(self) -> int:
        """Load every dictionary's lookup maps now. Returns how many loaded."""
        return sum(1 for d in self.list_dicts() if self._maps_for(d) is not None)

    # ----------------------------
    # Display
    # ----------------------------
    def render(self, term: str) -> DefinitionView:
        """Collect every entry for *term* from every dictionary."""
        entries: list[EntryResult] = []
        css_urls: list[str] = []
        for d in self.list_dicts():
            found = self._lookup_in(d, term)
            if not found:
                continue
            entries.extend(found)
            css_asset = self.get_dict_css_asset(d.id)
            if css_asset:
                css_urls.append(f"/dict_asset/{d.id}/{css_asset}")
        return DefinitionView(term=term, entries=tuple(entries), css_urls=tuple(css_urls))

    def _maps_for(self, d: Dictionary) -> Optional[tuple[dict[str, list[bytes]], dict[str, str]]]:
        mdx_path = d.mdx_path(self.dict_root)
        if not mdx_path.exists():
            LOG.warning("MDX file missing for dictionary %s: %s", d.name, mdx_path)
            return None
        try:
            return _get_mdx_maps_cached(d.id, str(mdx_path))
        except Exception as exc:
            LOG.warning("Failed to read dictionary %s: %s", d.name, exc)
            return None

    def _lookup_in(self, d: Dictionary, word: str) -> list[EntryResult]:
        maps = self._maps_for(d)
        if maps is None:
            return []
        exact_map, casefold_map = maps

        # Exact match first, then a case-insensitive fallback for dictionaries
        # with inconsistent headword casing.
        lookup_key = word
        vals = exact_map.get(lookup_key)
        if vals is None:
            mapped = casefold_map.get(word.casefold())
            if mapped is not None:
                lookup_key = mapped
                vals = exact_map.get(lookup_key)
        if not vals:
            return []

        entries: list[EntryResult] = []
        seen: set[tuple[str, int]] = set()
        for v in vals:
            resolved_head, resolved_vals = self._resolve_mdx_link(exact_map, lookup_key, v)
            for rv in resolved_vals:
                key = (resolved_head, hash(rv))
                if key in seen:
                    continue
                seen.add(key)
                html = rewrite_mdx_html(d.id, _safe_decode(rv))
                entries.append(EntryResult(dict_id=d.id, dict_name=d.name, headword=resolved_head, html=html))
        return entries

    def _resolve_mdx_link(
        self,
        exact_map: dict[str, list[bytes]],
        head: str,
        val_b: bytes,
    ) -> tuple[str, list[bytes]]:
        """Follow '@@@LINK=target' redirect records, at most 10 deep.

        When the chain ends on a key with several records, all of them are
        returned.
        """
        seen: set[str] = set()
        cur_head = head
        cur_vals = [val_b]

        for _ in range(10):
            text = _safe_decode(cur_vals[0])

            m = re.search(r"@@@LINK=(?P<target>.+)", text)
            if not m:
                return cur_head, cur_vals

            target = m.group("target").strip()
            if not target or target in seen:
                return cur_head, cur_vals

            target_vals = exact_map.get(target)
            if not target_vals:
                return cur_head, cur_vals

            seen.add(target)
            cur_head = target
            cur_vals = target_vals

        return cur_head, cur_vals[:1]

    # ----------------------------
    # Assets
    # ----------------------------
    def get_dict_css_asset(self, dict_id: int) -> str | None:
        """
        Stylesheet for a dictionary's entries, in priority order:
        1) css_filename recorded at install time
        2) any extracted *.css on disk
        3) *.css packed inside an *.mdd (style/main preferred)
        """
        d = self.dict_repo.get_by_id(dict_id)
        if not d:
            return None

        if d.css_filename:
            return str(d.css_filename).replace("\\", "/").lstrip("/")

        base_dir = d.base_dir(self.dict_root)

        css_files = list(base_dir.rglob("*.css"))
        if css_files:
            return str(css_files[0].relative_to(base_dir)).replace("\\", "/")

        for mdd_path in base_dir.rglob("*.mdd"):
            mdd_map = _get_mdd_map_cached(dict_id, str(mdd_path))
            css_keys = [k for k in mdd_map.keys() if k.lower().endswith(".css")]
            if not css_keys:
                continue
            css_keys.sort(
                key=lambda k: (
                    "style" not in k.lower(),
                    "main" not in k.lower(),
                    len(k),
                )
            )
            return css_keys[0].lstrip("/")

        return None

    def get_asset_bytes(self, dict_id: int, asset_path: str) -> Tuple[bytes, str]:
        """
        Serve an asset referenced by MDX HTML (img/css/js/audio).
        Extracted files on disk win over resources packed in an MDD.
        """
        d = self.dict_repo.get_by_id(dict_id)
        if not d:
            raise DictLookupError("Dictionary not found.")

        # decode %xx, normalize slashes, drop query/fragment
        asset_path = unquote(asset_path).replace("\\", "/")
        asset_path = asset_path.split("?", 1)[0].split("#", 1)[0]
        asset_path = asset_path.lstrip("/")

        base_dir = d.base_dir(self.dict_root)
        candidate = (base_dir / asset_path).resolve()

        if not candidate.is_relative_to(base_dir):
            raise DictLookupError("Invalid asset path.")

        if candidate.is_file():
            data = candidate.read_bytes()
            mime = mimetypes.guess_type(candidate.name)[0] or "application/octet-stream"
            return data, mime

        for mdd_path in base_dir.rglob("*.mdd"):
            mdd_map = _get_mdd_map_cached(dict_id, str(mdd_path))
            if asset_path in mdd_map:
                mime = mimetypes.guess_type(asset_path)[0] or "application/octet-stream"
                return mdd_map[asset_path], mime

        raise DictLookupError("Asset not found.")


# ----------------------------
# Caches
# ----------------------------
@lru_cache(maxsize=8)
def _get_mdx_maps_cached(dict_id: int, mdx_path: str) -> tuple[dict[str, list[bytes]], dict[str, str]]:
    """Build lookup maps for an MDX file.

    Returns:
      - exact_map: headword -> every record stored under it
      - casefold_map: casefold(headword) -> first headword seen with that fold
    """
    mdx = MDX(mdx_path)
    exact: dict[str, list[bytes]] = {}
    casefold_map: dict[str, str] = {}

    for k, v in mdx.items():
        ks = _safe_decode(k)
        exact.setdefault(ks, []).append(v)
        casefold_map.setdefault(ks.casefold(), ks)

    return exact, casefold_map


@lru_cache(maxsize=32)
def _get_mdd_map_cached(dict_id: int, mdd_path: str) -> dict[str, bytes]:
    """Index packed MDD assets by key (no leading '/', forward slashes)."""
    mdd = MDD(mdd_path)
    out: dict[str, bytes] = {}

    for k, v in mdd.items():
        key = _safe_decode(k).replace("\\", "/")
        if key.startswith("./"):
            key = key[2:]
        out[key.lstrip("/")] = v

    return out


def clear_caches() -> None:
    _get_mdx_maps_cached.cache_clear()
    _get_mdd_map_cached.cache_clear()


def _safe_decode(b) -> str:
    if isinstance(b, str):
        return b
    # Chinese dictionaries commonly need gb18030/big5
    for enc in ("utf-8", "utf-16", "gb18030", "big5", "cp950"):
        try:
            return b.decode(enc)
        except UnicodeDecodeError:
            pass
    return b.decode("latin-1")


# ----------------------------
# HTML Rewriting
# - sound:// and relative assets -> /dict_asset/...
# - entry:// / bword:// -> /define?term=...
# ----------------------------
_ATTR_RE = re.compile(r'''(?P<attr>src|href)=(?P<q>["'])(?P<url>.*?)(?P=q)''', re.IGNORECASE)


def rewrite_mdx_html(dict_id: int, html: str) -> str:
    def repl(m):
        attr, q, url = m.group("attr"), m.group("q"), m.group("url").strip()

        if not url:
            return m.group(0)

        if url.startswith(("http://", "https://", "data:", "#")):
            return m.group(0)

        if url.lower().startswith("sound://"):
            rel = url.split("://", 1)[1].lstrip("/").replace("\\", "/")
            return f'{attr}={q}/dict_asset/{dict_id}/{rel}{q}'

        # Cross-references go back through the normal lookup.
        if url.lower().startswith(("entry://", "bword://")):
            target = url.split("://", 1)[1].strip()
            return f'{attr}={q}/define?term={quote(target)}{q}'

        url_norm = url
        if url_norm.lower().startswith("file://"):
            url_norm = url_norm.split("://", 1)[1]

        url_norm = url_norm.replace("\\", "/")
        url_norm = url_norm.split("?", 1)[0].split("#", 1)[0]
        if url_norm.startswith("./"):
            url_norm = url_norm[2:]
        url_norm = url_norm.lstrip("/")

        if not url_norm:
            return m.group(0)

        return f'{attr}={q}/dict_asset/{dict_id}/{url_norm}{q}'

    return _ATTR_RE.sub(repl, html)
