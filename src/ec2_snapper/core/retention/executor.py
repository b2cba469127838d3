"""Sequential deregistration of AMIs and deletion of their snapshots."""

import logging
from typing import Dict, List, Optional

from ec2_snapper.core.aws.ec2 import EC2Manager
from ec2_snapper.core.models import SelectionResult
from ec2_snapper.utils.logger import setup_logger


class DeletionExecutor:
    """Deletes the selected AMIs one at a time, oldest first.

    Each AMI is deregistered, then each of its correlated snapshots is
    deleted, before the next AMI is touched. The first real failure is
    raised as is and leaves the remaining AMIs untouched; nothing already
    deleted is rolled back. Under dry run the requests are still issued with
    ``DryRun=True`` and the service's "would have succeeded" answer counts
    as success.
    """

    def __init__(self, ec2_manager: EC2Manager, logger: Optional[logging.Logger] = None):
        self.ec2_manager = ec2_manager
        self.logger = logger or setup_logger(__name__, "delete_amis.log")

    def execute(
        self,
        selection: SelectionResult,
        correlation: Dict[str, List[str]],
        dry_run: bool = False,
    ) -> int:
        """Process every AMI of ``selection`` and return how many were handled."""
        processed = 0
        for image in selection:
            self._delete_image(image, correlation.get(image.image_id, []), dry_run)
            processed += 1
        return processed

    def _delete_image(self, image, snapshot_ids: List[str], dry_run: bool) -> None:
        self.logger.info(f'{image.image_id}: De-registering AMI named "{image.name}"...')
        self.ec2_manager.deregister_image(image.image_id, dry_run=dry_run)

        self.logger.info(
            f"{image.image_id}: Found {len(snapshot_ids)} snapshot(s) to delete"
        )
        for snapshot_id in snapshot_ids:
            self.logger.info(f"{image.image_id}: Deleting snapshot {snapshot_id}...")
            self.ec2_manager.delete_snapshot(snapshot_id, dry_run=dry_run)

        if dry_run:
            self.logger.info(f"{image.image_id}: Would be deleted (dry run)")
        else:
            self.logger.info(f"{image.image_id}: Done!")
