"""EC2 manager for AMI lifecycle operations."""

import time
from contextlib import contextmanager
from typing import Callable, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from ec2_snapper.core.constants import (
    AMI_NOT_FOUND_ERROR_CODES,
    AUTH_ERROR_CODES,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_POLL_TIMEOUT_SECONDS,
    DRY_RUN_ERROR_CODE,
    IGNORED_INSTANCE_STATES,
    INSTANCE_ID_TAG_KEY,
)
from ec2_snapper.core.models import AMIInfo, SnapshotInfo
from ec2_snapper.utils.exceptions import (
    AuthError,
    ExternalServiceError,
    NO_CREDENTIALS_MESSAGE,
    NotFoundError,
)
from ec2_snapper.utils.logger import setup_logger


def error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


def is_dry_run_signal(error: ClientError) -> bool:
    """Whether ``error`` is EC2's "request would have succeeded" dry-run answer."""
    return error_code(error) == DRY_RUN_ERROR_CODE


@contextmanager
def aws_errors(action: str):
    """Translate boto errors raised inside the block into ec2-snapper errors."""
    try:
        yield
    except NoCredentialsError as e:
        raise AuthError(NO_CREDENTIALS_MESSAGE) from e
    except ClientError as e:
        if error_code(e) in AUTH_ERROR_CODES:
            raise AuthError(f"AWS rejected the credentials while trying to {action}: {e}") from e
        raise ExternalServiceError(f"Failed to {action}: {e}") from e
    except BotoCoreError as e:
        raise ExternalServiceError(f"Failed to {action}: {e}") from e


class EC2Manager:
    """AWS EC2 resource manager for AMIs, snapshots and instance lookup."""

    def __init__(self, session: boto3.Session, region: str):
        """Initialize EC2Manager."""
        self.session = session
        self.region = region
        self.ec2_client = session.client("ec2", region_name=region)
        self.logger = setup_logger(__name__, "ec2_manager.log")

    # ------------------------------------------------------------------
    # Instances
    # ------------------------------------------------------------------
    def find_instance_id_by_name(self, instance_name: str) -> str:
        """Resolve the Name tag of an instance to its id; exactly one must match."""
        with aws_errors(f"look up instance named '{instance_name}'"):
            response = self.ec2_client.describe_instances(
                Filters=[{"Name": "tag:Name", "Values": [instance_name]}]
            )

        instance_ids = []
        for reservation in response.get("Reservations", []):
            for instance in reservation.get("Instances", []):
                state = instance.get("State", {}).get("Name", "")
                if state not in IGNORED_INSTANCE_STATES:
                    instance_ids.append(instance["InstanceId"])

        if not instance_ids:
            raise NotFoundError(f'No EC2 instance was found with the name "{instance_name}"')
        if len(instance_ids) > 1:
            raise NotFoundError(
                f'Found {len(instance_ids)} EC2 instances with the name "{instance_name}" '
                f"({', '.join(instance_ids)}); use --instance-id instead"
            )

        self.logger.debug(f"Resolved instance name {instance_name} to {instance_ids[0]}")
        return instance_ids[0]

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------
    def find_images(self, instance_id: str) -> List[AMIInfo]:
        """All AMIs tagged as created from ``instance_id``, in no particular order."""
        with aws_errors(f"describe AMIs of instance {instance_id}"):
            response = self.ec2_client.describe_images(
                Owners=["self"],
                Filters=[{"Name": f"tag:{INSTANCE_ID_TAG_KEY}", "Values": [instance_id]}],
            )

        images = [AMIInfo.from_aws_image(image) for image in response.get("Images", [])]
        if not images:
            raise NotFoundError(f'No AMIs were found for EC2 instance "{instance_id}"')
        return images

    def describe_image(self, image_id: str) -> Optional[AMIInfo]:
        """Describe one AMI, or None while EC2 does not report it yet."""
        with aws_errors(f"describe AMI {image_id}"):
            try:
                response = self.ec2_client.describe_images(ImageIds=[image_id])
            except ClientError as e:
                if error_code(e) in AMI_NOT_FOUND_ERROR_CODES:
                    return None
                raise

        images = response.get("Images", [])
        return AMIInfo.from_aws_image(images[0]) if images else None

    def create_image(
        self,
        instance_id: str,
        name: str,
        no_reboot: bool = True,
        dry_run: bool = False,
        description: str = "",
    ) -> Optional[str]:
        """Create an AMI and return its id; None when a dry run would have succeeded."""
        params = {
            "InstanceId": instance_id,
            "Name": name,
            "NoReboot": no_reboot,
            "DryRun": dry_run,
        }
        if description:
            params["Description"] = description

        with aws_errors(f"create AMI of instance {instance_id}"):
            try:
                response = self.ec2_client.create_image(**params)
            except ClientError as e:
                if dry_run and is_dry_run_signal(e):
                    return None
                raise
        return response["ImageId"]

    def wait_for_image(
        self,
        image_id: str,
        timeout: float = DEFAULT_POLL_TIMEOUT_SECONDS,
        interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> AMIInfo:
        """Poll until a freshly created AMI becomes visible.

        Raises:
            NotFoundError: the AMI is still not visible after ``timeout`` seconds.
        """
        deadline = clock() + timeout
        attempt = 0
        while True:
            attempt += 1
            image = self.describe_image(image_id)
            if image is not None:
                self.logger.debug(f"AMI {image_id} visible after {attempt} attempt(s)")
                return image
            if clock() >= deadline:
                raise NotFoundError(
                    f"Could not find the AMI just created ({image_id}) after {timeout:g}s."
                )
            self.logger.debug(f"AMI {image_id} not visible yet, retrying in {interval:g}s")
            sleep(interval)

    def tag_resource(self, resource_id: str, tags: Dict[str, str]) -> None:
        with aws_errors(f"tag {resource_id}"):
            self.ec2_client.create_tags(
                Resources=[resource_id],
                Tags=[{"Key": k, "Value": v} for k, v in tags.items()],
            )

    def deregister_image(self, image_id: str, dry_run: bool = False) -> bool:
        """Deregister an AMI. Returns False when only a dry run was performed."""
        return self._dry_run_aware(
            f"deregister AMI {image_id}",
            lambda: self.ec2_client.deregister_image(ImageId=image_id, DryRun=dry_run),
        )

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------
    def describe_snapshots(self, owner_id: str) -> List[SnapshotInfo]:
        """Every snapshot owned by ``owner_id``."""
        snapshots = []
        with aws_errors(f"describe snapshots of account {owner_id}"):
            paginator = self.ec2_client.get_paginator("describe_snapshots")
            for page in paginator.paginate(OwnerIds=[owner_id]):
                for snapshot in page.get("Snapshots", []):
                    snapshots.append(SnapshotInfo.from_aws_snapshot(snapshot))
        return snapshots

    def delete_snapshot(self, snapshot_id: str, dry_run: bool = False) -> bool:
        """Delete a snapshot. Returns False when only a dry run was performed."""
        return self._dry_run_aware(
            f"delete snapshot {snapshot_id}",
            lambda: self.ec2_client.delete_snapshot(SnapshotId=snapshot_id, DryRun=dry_run),
        )

    def _dry_run_aware(self, action: str, call: Callable[[], object]) -> bool:
        with aws_errors(action):
            try:
                call()
            except ClientError as e:
                if is_dry_run_signal(e):
                    self.logger.debug(f"Dry run: request to {action} would have succeeded")
                    return False
                raise
        return True


def create_ec2_manager(session: boto3.Session, region: str) -> EC2Manager:
    """Create EC2Manager instance."""
    return EC2Manager(session, region)
