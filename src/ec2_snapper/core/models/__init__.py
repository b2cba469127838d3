"""Simple data models for AWS resources."""

# AMI models
from .ami import (
    AMIState,
    AMIInfo,
    parse_creation_date,
)

# Snapshot models
from .snapshot import (
    SnapshotState,
    SnapshotInfo,
)

# Retention models
from .retention import (
    RetentionPolicy,
    SelectionResult,
)

__all__ = [
    # AMI models
    "AMIState",
    "AMIInfo",
    "parse_creation_date",
    # Snapshot models
    "SnapshotState",
    "SnapshotInfo",
    # Retention models
    "RetentionPolicy",
    "SelectionResult",
]
