#!/usr/bin/env python3
import datetime
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .base import BaseJob
from ec2_snapper.core.models import RetentionPolicy
from ec2_snapper.core.retention import (
    DeletionExecutor,
    correlate_snapshots,
    parse_older_than,
    select_images,
)
from ec2_snapper.utils.exceptions import ValidationRules


@dataclass
class DeleteMetrics:
    """Metrics tracking for the delete AMIs operation"""

    total_images: int = 0
    eligible_images: int = 0
    exempted_images: int = 0
    deleted_images: int = 0
    snapshots_found: int = 0
    operation_duration: float = 0.0
    dry_run_mode: bool = False


class DeleteAMIsJob(BaseJob):
    """
    Delete old AMIs of an EC2 instance Job:

    Features:
    - Age threshold with a minimum number of AMIs always kept
    - Deletes the snapshots backing each AMI
    - Dry-run capabilities for safe operations
    """

    def __init__(self, config_manager=None, session=None, log_level=None):
        super().__init__(
            config_manager=config_manager, job_name="delete_amis", session=session, log_level=log_level
        )

    def execute(self, **kwargs) -> Dict[str, Any]:
        """Delete AMIs older than --older-than while keeping --require-at-least of them"""
        operation_start = time.time()
        metrics = DeleteMetrics()

        instance_id = kwargs.get("instance_id")
        instance_name = kwargs.get("instance_name")
        older_than = kwargs.get("older_than")
        require_at_least = kwargs.get("require_at_least", 0)
        dry_run = kwargs.get("dry_run", False)
        now: Optional[datetime.datetime] = kwargs.get("now")
        metrics.dry_run_mode = dry_run

        # Validate everything before the first AWS call
        region = self.resolve_region(kwargs.get("region"))
        ValidationRules.require_exactly_one(instance_id, instance_name)
        ValidationRules.require(older_than, "--older-than")
        ValidationRules.require_non_negative(require_at_least, "--require-at-least")
        policy = RetentionPolicy(
            older_than_hours=parse_older_than(older_than),
            require_at_least=require_at_least,
        )

        if dry_run:
            self.log(
                "WARNING: This is a dry run, and no actions will be taken, "
                "despite what any output may say!",
                "warning",
            )

        ec2 = self.create_ec2_manager(region)
        if not instance_id:
            instance_id = ec2.find_instance_id_by_name(instance_name)

        images = ec2.find_images(instance_id)
        metrics.total_images = len(images)

        if len(images) <= policy.require_at_least:
            message = (
                f"NO ACTION TAKEN. There are currently {len(images)} AMIs, and "
                f"--require-at-least={policy.require_at_least} so no further action can be taken."
            )
            self.log(message)
            return self._result("no_action", instance_id, message, metrics, operation_start)

        # The owning account scopes the snapshot lookup
        owner_id = images[0].owner_id
        self.log(f"==> Identified current AWS Account Id as {owner_id}")

        selection = select_images(
            images, policy, now or datetime.datetime.now(datetime.timezone.utc)
        )
        metrics.eligible_images = selection.eligible
        metrics.exempted_images = selection.exempted
        self.log(f"==> Found {selection.eligible} total AMI(s) for deletion.")

        if not selection.eligible:
            self.log("No AMIs to delete.", "warning")
            return self._result("no_action", instance_id, "No AMIs to delete.", metrics, operation_start)

        snapshots = ec2.describe_snapshots(owner_id)
        metrics.snapshots_found = len(snapshots)
        self.log(f"==> Found {len(snapshots)} total snapshots in this account.")

        if selection.exempted:
            self.log(
                f"==> Only deleting {len(selection)} total AMIs to honor "
                f"'--require-at-least={policy.require_at_least}'."
            )

        correlation = correlate_snapshots(selection.selected, snapshots)
        executor = DeletionExecutor(ec2, self.logger)
        metrics.deleted_images = executor.execute(selection, correlation, dry_run=dry_run)

        if dry_run:
            message = (
                f"DRY RUN. Had this not been a dry run, {metrics.deleted_images} AMI's "
                "and their corresponding snapshots would have been deleted."
            )
        else:
            message = (
                f"Success! Deleted {metrics.deleted_images} AMI's and their "
                "corresponding snapshots."
            )
        self.log(f"==> {message}")

        result = self._result(
            "dry_run" if dry_run else "success", instance_id, message, metrics, operation_start
        )
        result["deleted_ami_ids"] = [image.image_id for image in selection]
        result["snapshots"] = correlation
        return result

    def _result(self, status, instance_id, message, metrics, operation_start) -> Dict[str, Any]:
        metrics.operation_duration = time.time() - operation_start
        return {
            "status": status,
            "instance_id": instance_id,
            "message": message,
            "total_images": metrics.total_images,
            "eligible": metrics.eligible_images,
            "exempted": metrics.exempted_images,
            "deleted": metrics.deleted_images,
            "dry_run": metrics.dry_run_mode,
            "correlation_id": self.correlation_id,
            "metrics": metrics,
        }
