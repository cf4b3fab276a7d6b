"""
Minimal log message record used by the enrichment engine
"""

import logging
import re
from typing import Any, Dict, Iterator, Mapping, Optional, Set

logger = logging.getLogger("geoenrich.message")

# Fields starting with this prefix are internal bookkeeping, never user data
INTERNAL_FIELD_PREFIX = "gl2_"

VALID_KEY_CHARS = re.compile(r"^[\w.\-@]+$")


class Message:
    """A mutable bag of named fields"""

    def __init__(self, fields: Optional[Mapping[str, Any]] = None):
        self._fields: Dict[str, Any] = {}
        if fields:
            self.add_fields(fields)

    @staticmethod
    def valid_key(key: str) -> bool:
        return isinstance(key, str) and bool(VALID_KEY_CHARS.match(key))

    def get_field(self, key: str) -> Any:
        return self._fields.get(key)

    def has_field(self, key: str) -> bool:
        return key in self._fields

    def add_field(self, key: str, value: Any):
        """Set a field, replacing any previous value. None is stored as-is."""
        if not self.valid_key(key):
            logger.debug(f"Ignoring invalid field name {key!r}")
            return
        self._fields[key] = value

    def add_fields(self, fields: Mapping[str, Any]):
        for key, value in fields.items():
            self.add_field(key, value)

    def remove_field(self, key: str) -> bool:
        return self._fields.pop(key, _MISSING) is not _MISSING

    def get_field_names(self) -> Set[str]:
        return set(self._fields)

    @property
    def fields(self) -> Dict[str, Any]:
        return dict(self._fields)

    def __contains__(self, key: object) -> bool:
        return key in self._fields

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._fields))

    def __repr__(self) -> str:
        return f"Message({self._fields!r})"


_MISSING = object()
