"""AWS core modules."""

from .ec2 import EC2Manager, create_ec2_manager, aws_errors, is_dry_run_signal
from .cloudwatch import CloudWatchManager, create_cloudwatch_manager

__all__ = [
    "EC2Manager",
    "create_ec2_manager",
    "aws_errors",
    "is_dry_run_signal",
    "CloudWatchManager",
    "create_cloudwatch_manager",
]
