"""
Editing operations: ID space, atlas compaction and the edit session
"""

from .context import EditContext
from .id_space import allocate, remove
from .atlas import CompactResult, compact, referenced_sprite_ids, build_remap
from .session import EditSession, FlagEdit

__all__ = [
    # Context
    "EditContext",
    # ID space
    "allocate",
    "remove",
    # Atlas
    "CompactResult",
    "compact",
    "referenced_sprite_ids",
    "build_remap",
    # Session
    "EditSession",
    "FlagEdit",
]
