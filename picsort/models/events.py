"""Change notification models for the directory watcher."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict


class ChangeKind(Enum):
    """Kind of filesystem change reported to consumers."""

    CREATED = "Created"
    MODIFIED = "Modified"
    REMOVED = "Removed"


@dataclass(frozen=True)
class ChangeEvent:
    """
    Debounced change notification for one path.

    Attributes:
        kind: What happened to the file.
        path: Path of the file.
    """

    kind: ChangeKind
    path: Path

    def to_dict(self) -> Dict[str, str]:
        """Serialize as a tagged value, e.g. {"type": "Modified", "path": ...}."""
        return {"type": self.kind.value, "path": str(self.path)}

    def __str__(self) -> str:
        return f"{self.kind.value}({self.path})"


@dataclass
class PendingChange:
    """
    Latest raw event seen for a path, waiting for the debounce window.

    Overwritten, not merged, when a newer event arrives for the same path.
    """

    path: Path
    kind: ChangeKind
    first_seen: float
