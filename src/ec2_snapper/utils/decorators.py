"""Decorator patterns wiring click commands to ec2-snapper jobs."""

import click
import importlib
from functools import wraps
from typing import Any, Callable, Dict, Type

from ec2_snapper.jobs.base import BaseJob
from ec2_snapper.utils.exceptions import SnapperError
from ec2_snapper.utils.logger import setup_logger

# Centralized job registry
JOB_REGISTRY = {
    "ami": {
        "create": "ec2_snapper.jobs.create_ami.CreateAMIJob",
        "delete": "ec2_snapper.jobs.delete_amis.DeleteAMIsJob",
    },
    "metric": {
        "report": "ec2_snapper.jobs.report_metric.ReportMetricJob",
    },
}

STATUS_COLORS = {
    "success": "green",
    "dry_run": "yellow",
    "no_action": "yellow",
}


def get_job_class(operation_type: str, func_name: str) -> Type[BaseJob]:
    """Dynamically resolve job class based on operation type and function name.

    Args:
        operation_type: Type of operation (ami, metric)
        func_name: Function name to determine specific job

    Returns:
        Job class for the operation

    Raises:
        ValueError: If operation type or function name is not recognized
    """
    registry = JOB_REGISTRY.get(operation_type, {})

    for keyword, job_path in registry.items():
        if keyword in func_name:
            module_path, class_name = job_path.rsplit(".", 1)
            module = importlib.import_module(module_path)
            return getattr(module, class_name)

    raise ValueError(f"Unknown {operation_type} operation: {func_name}")


def handle_operation_error(operation_name: str, error: Exception) -> None:
    """Report a failed operation on stderr and in the error log."""
    click.secho(f"ERROR: {error}", fg="red", err=True)

    logger = setup_logger("ec2_snapper.errors", "errors.log")
    logger.error(
        f"Error in {operation_name}: {error}",
        extra={"operation": operation_name, "error_type": type(error).__name__},
    )


def handle_output(result: Dict[str, Any]) -> None:
    """Echo the job summary, coloured by outcome."""
    message = result.get("message") if isinstance(result, dict) else None
    if not message:
        return
    color = STATUS_COLORS.get(result.get("status"), None)
    click.secho(f"==> {message}", fg=color)


def snapper_operation(operation_type: str):
    """Run the job registered for the decorated command.

    The command body runs first (per-command setup such as logging), then
    the job is executed with the command's options. Any ec2-snapper error is
    reported and turns into exit code 1.
    """

    def decorator(func: Callable) -> Callable:
        job_class = get_job_class(operation_type, func.__name__)

        @wraps(func)
        def wrapper(ctx, **kwargs):
            operation_name = func.__name__
            func(ctx, **kwargs)
            verbose = kwargs.pop("verbose", False)

            try:
                job = job_class(
                    session=ctx.obj.get("session") if ctx.obj else None,
                    log_level="DEBUG" if verbose else None,
                )
                result = job.execute(**kwargs)
            except SnapperError as e:
                handle_operation_error(operation_name, e)
                ctx.exit(1)
            except Exception as e:
                handle_operation_error(operation_name, e)
                raise

            handle_output(result)
            return result

        return wrapper

    return decorator


def ami_operation():
    """Decorator for AMI-related operations."""
    return snapper_operation("ami")


def metric_operation():
    """Decorator for metric-related operations."""
    return snapper_operation("metric")
