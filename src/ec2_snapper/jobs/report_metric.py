#!/usr/bin/env python3

from typing import Any, Dict

from .base import BaseJob
from ec2_snapper.utils.exceptions import ValidationError, ValidationRules


class ReportMetricJob(BaseJob):
    """Job to publish a completion metric to CloudWatch"""

    def __init__(self, config_manager=None, session=None, log_level=None):
        super().__init__(
            config_manager=config_manager, job_name="report_metric", session=session, log_level=log_level
        )

    def execute(self, **kwargs) -> Dict[str, Any]:
        """Put one metric datum into the given namespace"""
        namespace = kwargs.get("namespace")
        metric_name = kwargs.get("metric_name")
        value = kwargs.get("value")
        unit = kwargs.get("unit")

        region = self.resolve_region(kwargs.get("region"))
        ValidationRules.require(namespace, "--namespace")
        ValidationRules.require(metric_name, "--name")

        if value is None:
            value = self.config_manager.get_default_metric_value()
        if not unit:
            unit = self.config_manager.get_default_metric_unit()
        try:
            value = float(value)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"The argument '--value' must be a number, got {value!r}.") from e

        cloudwatch = self.create_cloudwatch_manager(region)
        request = cloudwatch.put_metric(namespace, metric_name, value, unit)

        self.log(f"==> Reported {namespace}/{metric_name}={value:g} {unit}")
        return {
            "status": "success",
            "namespace": namespace,
            "metric_name": metric_name,
            "value": value,
            "unit": unit,
            "request": request,
            "message": f"Reported {namespace}/{metric_name}={value:g} {unit}",
        }
