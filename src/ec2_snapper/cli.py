#!/usr/bin/env python3
"""
ec2-snapper CLI
Create AMIs of an EC2 instance and prune old ones
"""

import sys

import click

from ec2_snapper import __version__
from ec2_snapper.utils.decorators import ami_operation, metric_operation
from ec2_snapper.utils.logger import setup_logger

INSTANCE_ID_HELP = "The ID of the EC2 instance (the source of the AMIs)"
INSTANCE_NAME_HELP = "The Name tag of the EC2 instance (the source of the AMIs)"


def setup_logging(verbose: bool = False):
    level = "DEBUG" if verbose else "INFO"
    return setup_logger("ec2_snapper_cli", "cli.log", level)


# Common CLI options
def add_common_options(func):
    func = click.option("--verbose", is_flag=True, help="Enable verbose output")(func)
    func = click.option(
        "--region", help="The AWS region to use (e.g. us-west-2)"
    )(func)
    return func


def add_instance_options(func):
    func = click.option(
        "--dry-run", is_flag=True, help="Execute a simulated run"
    )(func)
    func = click.option("--instance-name", help=INSTANCE_NAME_HELP)(func)
    func = click.option("--instance-id", help=INSTANCE_ID_HELP)(func)
    return func


@click.group()
@click.pass_context
def cli(ctx):
    """ec2-snapper - create and prune AMIs of an EC2 instance"""
    ctx.ensure_object(dict)


@cli.command()
@click.option(
    "--ami-name",
    help="The name of the AMI; the current timestamp will be automatically appended",
)
@click.option(
    "--no-reboot",
    type=click.BOOL,
    default=True,
    show_default=True,
    help="If true, do not reboot the instance before creating the AMI. Rebooting "
    "guarantees a consistent filesystem, but an inconsistent snapshot is unlikely.",
)
@add_instance_options
@add_common_options
@click.pass_context
@ami_operation()
def create(ctx, ami_name, no_reboot, instance_id, instance_name, dry_run, region, verbose):
    """Create an AMI of the given EC2 instance"""
    setup_logging(verbose)


@cli.command()
@click.option(
    "--older-than",
    help="Delete AMIs older than the specified time; accepts formats like '30d' or '4h'.",
)
@click.option(
    "--require-at-least",
    type=int,
    default=0,
    show_default=True,
    help="Never delete AMIs such that fewer than this number of AMIs will remain.",
)
@add_instance_options
@add_common_options
@click.pass_context
@ami_operation()
def delete(ctx, older_than, require_at_least, instance_id, instance_name, dry_run, region, verbose):
    """Delete the AMIs of an EC2 instance older than a given age"""
    setup_logging(verbose)


@cli.command()
@click.option("--namespace", help="The CloudWatch namespace for this metric (e.g. MyCustomMetrics).")
@click.option("--name", "metric_name", help="The name of the metric (e.g. MyEC2Backup).")
@click.option("--value", type=float, help="The value of the metric. Defaults to 1.")
@click.option("--unit", help="The unit of the metric. Defaults to Count.")
@add_common_options
@click.pass_context
@metric_operation()
def report(ctx, namespace, metric_name, value, unit, region, verbose):
    """Report a metric to CloudWatch"""
    setup_logging(verbose)


@cli.command()
def version():
    """Show version information"""
    click.echo(f"You are running ec2-snapper version {__version__}.")


def main(args=None):
    """Console entry point; every failure exits with status 1."""
    try:
        rv = cli.main(args=args, prog_name="ec2-snapper", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
    sys.exit(rv if isinstance(rv, int) else 0)


if __name__ == "__main__":
    main()
