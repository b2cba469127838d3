#!/usr/bin/env python3

import datetime
import time
from typing import Any, Callable, Dict, Optional

from .base import BaseJob
from ec2_snapper.core.constants import (
    AMI_NAME_TIMESTAMP_FORMAT,
    INSTANCE_ID_TAG_KEY,
    NAME_TAG_KEY,
)
from ec2_snapper.utils.exceptions import ExternalServiceError, NotFoundError, ValidationRules


def build_ami_name(name: str, now: datetime.datetime) -> str:
    """Append a readable timestamp to the AMI name, e.g. 'web - 2024-05-01 at 13_04_05 (UTC)'."""
    return f"{name} - {now.strftime(AMI_NAME_TIMESTAMP_FORMAT)}"


class CreateAMIJob(BaseJob):
    """Job to create a tagged AMI of one EC2 instance"""

    def __init__(
        self,
        config_manager=None,
        session=None,
        sleep: Callable[[float], None] = time.sleep,
        log_level=None,
    ):
        super().__init__(
            config_manager=config_manager, job_name="create_ami", session=session, log_level=log_level
        )
        self.sleep = sleep

    def execute(self, **kwargs) -> Dict[str, Any]:
        """Create an AMI from the instance given by id or by name"""
        instance_id = kwargs.get("instance_id")
        instance_name = kwargs.get("instance_name")
        ami_name = kwargs.get("ami_name")
        dry_run = kwargs.get("dry_run", False)
        no_reboot = kwargs.get("no_reboot", True)
        now: Optional[datetime.datetime] = kwargs.get("now")

        # Validate parameters before touching AWS
        ValidationRules.require_exactly_one(instance_id, instance_name)
        ValidationRules.require(ami_name, "--ami-name")
        region = self.resolve_region(kwargs.get("region"))

        ec2 = self.create_ec2_manager(region)
        if not instance_id:
            instance_id = ec2.find_instance_id_by_name(instance_name)

        now = now or datetime.datetime.now(datetime.timezone.utc)
        full_name = build_ami_name(ami_name, now)

        self.log(f"==> Creating AMI for {instance_id}...")
        image_id = ec2.create_image(
            instance_id=instance_id,
            name=full_name,
            no_reboot=no_reboot,
            dry_run=dry_run,
            description=f"AMI created by ec2-snapper from {instance_id}",
        )

        if image_id is None:
            self.log(f"==> DRY RUN. Would have created AMI \"{full_name}\" from {instance_id}")
            return {
                "status": "dry_run",
                "instance_id": instance_id,
                "ami_id": None,
                "ami_name": full_name,
                "message": f'Dry run: would have created AMI "{full_name}" from {instance_id}',
            }

        ec2.wait_for_image(
            image_id,
            timeout=self.config_manager.get_poll_timeout(),
            interval=self.config_manager.get_poll_interval(),
            sleep=self.sleep,
        )

        # Tags are the only link back to the instance when pruning later
        self.log(f"==> Adding tags to AMI {image_id}...")
        ec2.tag_resource(image_id, {INSTANCE_ID_TAG_KEY: instance_id, NAME_TAG_KEY: ami_name})

        image = ec2.describe_image(image_id)
        if image is None:
            raise NotFoundError("Could not find the AMI just created.")
        if image.is_failed:
            raise ExternalServiceError(
                f"AMI {image_id} was created but entered a state of 'failed'. This is an AWS "
                "issue. Please re-run this command. Note that you will need to manually "
                "de-register the AMI in the AWS console or via the API."
            )

        self.log(f'==> Success! Created {image_id} named "{full_name}"')
        return {
            "status": "success",
            "instance_id": instance_id,
            "ami_id": image_id,
            "ami_name": full_name,
            "message": f'Created {image_id} named "{full_name}"',
        }
