"""Retention selection: which AMIs of an instance may be deleted.

The selection is a pure function of the inventory, the policy and the
reference time, so the same inputs always yield the same AMIs in the same
order.
"""

from datetime import datetime
from typing import List, Sequence

from ec2_snapper.core.models import AMIInfo, RetentionPolicy, SelectionResult


def age_hours(image: AMIInfo, now: datetime) -> float:
    """Age of ``image`` at ``now`` in hours."""
    return image.age_hours(now)


def filter_older_than(
    images: Sequence[AMIInfo], older_than_hours: float, now: datetime
) -> List[AMIInfo]:
    """AMIs strictly older than the threshold; an AMI exactly at it is kept."""
    return [image for image in images if age_hours(image, now) > older_than_hours]


def oldest_first(images: Sequence[AMIInfo]) -> List[AMIInfo]:
    # image_id breaks ties between AMIs registered in the same instant
    return sorted(images, key=lambda image: (image.creation_date, image.image_id))


def compute_excess(total: int, eligible: int, require_at_least: int) -> int:
    """Number of eligible AMIs that must be spared to honour the retention floor."""
    remaining = total - eligible
    return max(0, require_at_least - remaining)


def select_images(
    images: Sequence[AMIInfo], policy: RetentionPolicy, now: datetime
) -> SelectionResult:
    """Select the AMIs to delete under ``policy`` at time ``now``.

    1. When there are no more AMIs than ``require_at_least`` nothing is
       selected.
    2. An AMI is eligible when its age is strictly greater than
       ``older_than_hours``.
    3. If deleting every eligible AMI would leave fewer than
       ``require_at_least``, the most recently created eligible AMIs are
       spared until the floor holds.

    The selection is returned oldest first, which is the order in which it
    should be deleted.
    """
    total = len(images)
    if total <= policy.require_at_least:
        return SelectionResult(total=total)

    eligible = oldest_first(filter_older_than(images, policy.older_than_hours, now))
    if not eligible:
        return SelectionResult(total=total)

    excess = compute_excess(total, len(eligible), policy.require_at_least)
    selected = eligible[: len(eligible) - excess]

    return SelectionResult(
        selected=tuple(selected),
        total=total,
        eligible=len(eligible),
        exempted=excess,
    )
