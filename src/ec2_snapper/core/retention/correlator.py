"""Mapping of AMIs to the EBS snapshots that back them."""

from typing import Dict, List, Sequence

from ec2_snapper.core.models import AMIInfo, SnapshotInfo


def snapshot_matches_image(snapshot: SnapshotInfo, image_id: str) -> bool:
    """Whether ``snapshot`` backs the AMI ``image_id``.

    EC2 writes the AMI id into the description of the snapshots it creates
    for an image ("Created by CreateImage(i-...) for ami-... from vol-..."),
    so a snapshot belongs to an AMI when its description contains the AMI id
    as a plain substring. There is no word-boundary check: "img-1" also
    matches a description mentioning "img-12". Every such match is kept.
    """
    return bool(image_id) and image_id in (snapshot.description or "")


def correlate_snapshots(
    images: Sequence[AMIInfo], snapshots: Sequence[SnapshotInfo]
) -> Dict[str, List[str]]:
    """Map each AMI id to the ids of its snapshots, in inventory order.

    Every AMI gets an entry, possibly an empty list.
    """
    return {
        image.image_id: [
            snapshot.snapshot_id
            for snapshot in snapshots
            if snapshot_matches_image(snapshot, image.image_id)
        ]
        for image in images
    }
