"""String lookup with positional formatting and one/other pluralization."""

from __future__ import annotations

import json
import logging
from typing import Optional

from ace_assist.constants import STRINGS

log = logging.getLogger(__name__)


class Localizer:
    """Looks up user-facing strings by key.

    Plural keys follow the CLDR convention used by the string tables:
    ``"<key>.one"`` when ``count == 1`` and ``"<key>.other"`` otherwise.
    A missing key is returned verbatim so a gap in a translation is audible
    rather than silent.
    """

    def __init__(self, table: Optional[dict[str, str]] = None):
        self._table: dict[str, str] = dict(STRINGS)
        if table:
            self._table.update(table)
        self._missing: set[str] = set()

    def _lookup(self, key: str) -> str:
        text = self._table.get(key)
        if text is None:
            if key not in self._missing:
                self._missing.add(key)
                log.warning("Missing string for key %r", key)
            return key
        return text

    def has(self, key: str) -> bool:
        return key in self._table

    def get(self, key: str, *args: object) -> str:
        text = self._lookup(key)
        if not args:
            return text
        try:
            return text.format(*args)
        except (IndexError, KeyError, ValueError):
            log.warning("Bad format arguments for key %r: %r", key, args)
            return text

    def get_plural(self, key: str, count: int, *extra: object) -> str:
        suffix = "one" if count == 1 else "other"
        return self.get(f"{key}.{suffix}", count, *extra)


def load_strings(path: str) -> dict[str, str]:
    """Read a JSON object of ``key -> text`` overrides."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object of strings")
    return {str(k): str(v) for k, v in data.items()}
