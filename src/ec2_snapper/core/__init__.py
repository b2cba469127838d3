"""Core ec2-snapper modules: AWS managers, models and retention logic."""

from .aws import EC2Manager, create_ec2_manager, CloudWatchManager, create_cloudwatch_manager
from .models import (
    AMIInfo,
    SnapshotInfo,
    AMIState,
    SnapshotState,
    RetentionPolicy,
    SelectionResult,
)
from .retention import (
    parse_older_than,
    select_images,
    correlate_snapshots,
    snapshot_matches_image,
    DeletionExecutor,
)
from .constants import INSTANCE_ID_TAG_KEY

__all__ = [
    # AWS Managers
    "EC2Manager",
    "create_ec2_manager",
    "CloudWatchManager",
    "create_cloudwatch_manager",
    # Models
    "AMIInfo",
    "SnapshotInfo",
    "RetentionPolicy",
    "SelectionResult",
    # Enums
    "AMIState",
    "SnapshotState",
    # Retention
    "parse_older_than",
    "select_images",
    "correlate_snapshots",
    "snapshot_matches_image",
    "DeletionExecutor",
    # Constants
    "INSTANCE_ID_TAG_KEY",
]
