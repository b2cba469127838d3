"""Data models for AMI retention decisions."""

from dataclasses import dataclass
from typing import Tuple

from ec2_snapper.utils.exceptions import ValidationError

from .ami import AMIInfo


@dataclass(frozen=True)
class RetentionPolicy:
    """Age threshold and minimum number of AMIs to keep."""
    older_than_hours: float
    require_at_least: int = 0

    def __post_init__(self):
        if self.older_than_hours < 0:
            raise ValidationError("older_than_hours must not be negative.")
        if self.require_at_least < 0:
            raise ValidationError(
                "The argument '--require-at-least' must be a non-negative integer."
            )


@dataclass(frozen=True)
class SelectionResult:
    """AMIs chosen for deletion, oldest first."""
    selected: Tuple[AMIInfo, ...] = ()
    total: int = 0
    eligible: int = 0
    exempted: int = 0

    @property
    def remaining(self) -> int:
        """Number of AMIs left once the selection is deleted."""
        return self.total - len(self.selected)

    def __len__(self) -> int:
        return len(self.selected)

    def __iter__(self):
        return iter(self.selected)

    def __bool__(self) -> bool:
        return bool(self.selected)
