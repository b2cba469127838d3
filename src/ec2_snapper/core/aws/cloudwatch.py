"""Simple CloudWatch Manager for publishing ec2-snapper metrics."""

from typing import Any, Dict

import boto3

from ec2_snapper.core.aws.ec2 import aws_errors
from ec2_snapper.core.constants import DEFAULT_METRIC_UNIT, DEFAULT_METRIC_VALUE
from ec2_snapper.utils.logger import setup_logger


class CloudWatchManager:
    """Simple AWS CloudWatch metrics publisher."""

    def __init__(self, session: boto3.Session, region: str):
        """Initialize CloudWatchManager."""
        self.session = session
        self.region = region
        self.cloudwatch_client = session.client("cloudwatch", region_name=region)
        self.logger = setup_logger(__name__, "cloudwatch_manager.log")

    def put_metric(
        self,
        namespace: str,
        name: str,
        value: float = DEFAULT_METRIC_VALUE,
        unit: str = DEFAULT_METRIC_UNIT,
    ) -> Dict[str, Any]:
        """Publish a single metric datum and return the request that was sent."""
        request = {
            "Namespace": namespace,
            "MetricData": [{"MetricName": name, "Value": float(value), "Unit": unit}],
        }
        self.logger.info(f"Writing metric data to CloudWatch: {request}")
        with aws_errors(f"put metric {namespace}/{name}"):
            self.cloudwatch_client.put_metric_data(**request)
        return request


def create_cloudwatch_manager(session: boto3.Session, region: str) -> CloudWatchManager:
    """Create CloudWatchManager instance."""
    return CloudWatchManager(session, region)
