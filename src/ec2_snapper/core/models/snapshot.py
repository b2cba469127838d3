"""Simple data models for AWS EBS snapshot management."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any


class SnapshotState(Enum):
    """EBS Snapshot states."""
    PENDING = "pending"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class SnapshotInfo:
    """Simple snapshot information model."""
    snapshot_id: str
    description: str = ""
    owner_id: str = ""
    volume_id: str = ""
    volume_size: int = 0
    state: str = SnapshotState.COMPLETED.value
    tags: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    @property
    def is_completed(self) -> bool:
        return self.state == SnapshotState.COMPLETED.value

    def get_tag(self, key: str, default: str = "") -> str:
        return self.tags.get(key, default)

    @classmethod
    def from_aws_snapshot(cls, snapshot: Dict[str, Any]) -> "SnapshotInfo":
        """Create SnapshotInfo from AWS snapshot data."""
        # Extract tags
        tags = {}
        for tag in snapshot.get("Tags", []):
            if tag.get("Key"):
                tags[tag["Key"]] = tag.get("Value", "")

        return cls(
            snapshot_id=snapshot["SnapshotId"],
            description=snapshot.get("Description") or "",
            owner_id=snapshot.get("OwnerId", ""),
            volume_id=snapshot.get("VolumeId", ""),
            volume_size=snapshot.get("VolumeSize", 0),
            state=snapshot.get("State", SnapshotState.COMPLETED.value),
            tags=tags,
        )
