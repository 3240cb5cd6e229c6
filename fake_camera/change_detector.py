"""
Change detection for reconfiguration events.

A reconfiguration event carries the full configuration snapshot plus a
bitmask of the fields that changed. Field ids are the per-field levels of
the description table, resolved once by name when the detector is built.
"""

from typing import Dict, Iterable, List

from .config import PARAM_DESCRIPTIONS, ParamDescription

# Field id of a name missing from the description table
UNREGISTERED = 0


class ChangeMask(int):
    """Bitmask of changed configuration fields."""

    NONE = 0
    SENTINEL = 0xFFFFFFFF  # first event: every field changed

    @property
    def is_first(self) -> bool:
        return self == ChangeMask.SENTINEL


class ConfigChangeDetector:
    """Decides which registered fields a change mask covers."""

    def __init__(self, field_ids: Dict[str, int]):
        self._field_ids = dict(field_ids)

    @classmethod
    def from_descriptions(cls, descriptions: Iterable[ParamDescription] = PARAM_DESCRIPTIONS):
        return cls({d.name: d.level for d in descriptions})

    def field_id(self, name: str) -> int:
        return self._field_ids.get(name, UNREGISTERED)

    def changed(self, mask: int, field_id: int) -> bool:
        """True if `field_id` is registered and set in `mask`."""
        if not field_id:
            return False
        if mask == ChangeMask.SENTINEL:
            return True
        return (mask & field_id) != 0

    def mask_for(self, names: Iterable[str]) -> ChangeMask:
        """Build the change mask for the given field names. Unknown names add nothing."""
        mask = ChangeMask.NONE
        for name in names:
            mask |= self.field_id(name)
        return ChangeMask(mask)

    def changed_fields(self, mask: int) -> List[str]:
        return [name for name, fid in self._field_ids.items() if self.changed(mask, fid)]
