"""AMI retention: age parsing, selection, snapshot correlation and deletion."""

from .duration import parse_older_than
from .selector import age_hours, compute_excess, filter_older_than, select_images
from .correlator import correlate_snapshots, snapshot_matches_image
from .executor import DeletionExecutor

__all__ = [
    "parse_older_than",
    "age_hours",
    "compute_excess",
    "filter_older_than",
    "select_images",
    "correlate_snapshots",
    "snapshot_matches_image",
    "DeletionExecutor",
]
