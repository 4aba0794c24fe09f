"""
Metadata Snapshot Value Object

Embedded image metadata, captured once from the original source.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional


ORIENTATION_TAG = "Orientation"


@dataclass(frozen=True)
class MetadataSnapshot:
    """
    Immutable mapping of metadata tag name to value.

    Only the orientation tag is interpreted; every other value is passed
    through as returned by the metadata reader.
    """

    tags: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def empty(cls) -> "MetadataSnapshot":
        return cls()

    @classmethod
    def from_tags(cls, tags: Mapping[str, Any]) -> "MetadataSnapshot":
        return cls(tags=MappingProxyType(dict(tags)))

    @property
    def orientation(self) -> Optional[int]:
        """
        EXIF orientation code.

        Returns:
            Integer in [1, 8], or None if the tag is missing or invalid
        """
        value = self.tags.get(ORIENTATION_TAG)
        if value is None or isinstance(value, bool):
            return None
        try:
            code = int(value)
        except (TypeError, ValueError):
            return None
        return code if 1 <= code <= 8 else None

    @property
    def is_empty(self) -> bool:
        return len(self.tags) == 0

    def get(self, tag: str, default: Any = None) -> Any:
        return self.tags.get(tag, default)

    def __contains__(self, tag: object) -> bool:
        return tag in self.tags

    def __len__(self) -> int:
        return len(self.tags)
