"""ec2-snapper jobs package."""

from .base import BaseJob
from .create_ami import CreateAMIJob
from .delete_amis import DeleteAMIsJob
from .report_metric import ReportMetricJob

__all__ = [
    "BaseJob",
    "CreateAMIJob",
    "DeleteAMIsJob",
    "ReportMetricJob",
]
