"""
Tests for the click command line interface.
"""

import logging
import os

import pytest
from click.testing import CliRunner

from ec2_snapper import __version__
from ec2_snapper.cli import cli, main
from conftest import FakeCloudWatchClient, FakeEC2Client, FakeSession, aws_image


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, args, session=None):
    return runner.invoke(cli, args, obj={"session": session or FakeSession()})


class TestVersion:
    def test_version(self, runner):
        result = runner.invoke(cli, ["version"])

        assert result.exit_code == 0
        assert f"ec2-snapper version {__version__}" in result.output


class TestCreateCommand:
    def test_create(self, runner):
        ec2 = FakeEC2Client()

        result = invoke(
            runner,
            ["create", "--region", "us-east-1", "--instance-id", "i-0abc", "--ami-name", "web"],
            FakeSession(ec2=ec2),
        )

        assert result.exit_code == 0, result.output
        assert "Created ami-new1" in result.output
        assert ec2.calls[0][1]["NoReboot"] is True

    def test_no_reboot_false(self, runner):
        ec2 = FakeEC2Client()

        result = invoke(
            runner,
            ["create", "--region", "us-east-1", "--instance-id", "i-0abc",
             "--ami-name", "web", "--no-reboot=false"],
            FakeSession(ec2=ec2),
        )

        assert result.exit_code == 0, result.output
        assert ec2.calls[0][1]["NoReboot"] is False

    def test_both_instance_options_rejected(self, runner):
        ec2 = FakeEC2Client()

        result = invoke(
            runner,
            ["create", "--region", "us-east-1", "--instance-id", "i-0abc",
             "--instance-name", "web", "--ami-name", "web"],
            FakeSession(ec2=ec2),
        )

        assert result.exit_code == 1
        assert "exactly one of '--instance-id' or '--instance-name'" in result.output
        assert ec2.calls == []


class TestDeleteCommand:
    def test_delete_dry_run(self, runner, two_image_fixture):
        ec2, session = two_image_fixture

        result = invoke(
            runner,
            ["delete", "--region", "us-east-1", "--instance-id", "i-0abc",
             "--older-than", "1h", "--require-at-least", "0", "--dry-run"],
            session,
        )

        assert result.exit_code == 0, result.output
        assert "DRY RUN" in result.output
        assert len(ec2.images) == 2

    def test_delete(self, runner, two_image_fixture):
        ec2, session = two_image_fixture

        result = invoke(
            runner,
            ["delete", "--region", "us-east-1", "--instance-id", "i-0abc",
             "--older-than", "1h", "--require-at-least", "1"],
            session,
        )

        assert result.exit_code == 0, result.output
        assert "Deleted 1 AMI's" in result.output
        assert list(ec2.images) == ["ami-111"]

    def test_invalid_age(self, runner):
        result = invoke(
            runner,
            ["delete", "--region", "us-east-1", "--instance-id", "i-0abc", "--older-than", "soon"],
        )

        assert result.exit_code == 1
        assert "not formatted properly" in result.output

    def test_missing_region(self, runner):
        result = invoke(runner, ["delete", "--instance-id", "i-0abc", "--older-than", "1d"])

        assert result.exit_code == 1
        assert "--region" in result.output

    def test_unknown_instance(self, runner):
        result = invoke(
            runner,
            ["delete", "--region", "us-east-1", "--instance-id", "i-0zzz", "--older-than", "1d"],
            FakeSession(ec2=FakeEC2Client(images=[aws_image("ami-111", 48)])),
        )

        assert result.exit_code == 1
        assert "No AMIs were found" in result.output


class TestReportCommand:
    def test_report(self, runner):
        cloudwatch = FakeCloudWatchClient()

        result = invoke(
            runner,
            ["report", "--region", "us-east-1", "--namespace", "Backups",
             "--name", "WebBackup", "--value", "2.5", "--unit", "Seconds"],
            FakeSession(cloudwatch=cloudwatch),
        )

        assert result.exit_code == 0, result.output
        assert cloudwatch.metric_data[0]["MetricData"] == [
            {"MetricName": "WebBackup", "Value": 2.5, "Unit": "Seconds"}
        ]

    def test_missing_namespace(self, runner):
        result = invoke(runner, ["report", "--region", "us-east-1", "--name", "WebBackup"])

        assert result.exit_code == 1
        assert "--namespace" in result.output


class TestMainEntryPoint:
    def test_usage_errors_exit_with_one(self):
        with pytest.raises(SystemExit) as excinfo:
            main(["delete", "--no-such-option"])
        assert excinfo.value.code == 1

    def test_version_exits_with_zero(self):
        with pytest.raises(SystemExit) as excinfo:
            main(["version"])
        assert excinfo.value.code == 0


class TestVerboseOption:
    def test_verbose_raises_job_logging_to_debug(self, runner, two_image_fixture, monkeypatch):
        _, session = two_image_fixture
        monkeypatch.setenv("LOG_LEVEL", "INFO")

        result = invoke(
            runner,
            ["delete", "--region", "us-east-1", "--instance-id", "i-0abc",
             "--older-than", "1h", "--dry-run", "--verbose"],
            session,
        )

        assert result.exit_code == 0, result.output
        assert os.environ["LOG_LEVEL"] == "INFO"
        assert logging.getLogger("ec2_snapper.jobs.delete_amis").level == logging.DEBUG
        assert logging.getLogger("ec2_snapper.core.aws.ec2").level == logging.DEBUG

    def test_default_level_without_verbose(self, runner, two_image_fixture):
        _, session = two_image_fixture

        result = invoke(
            runner,
            ["delete", "--region", "us-east-1", "--instance-id", "i-0abc",
             "--older-than", "1h", "--dry-run"],
            session,
        )

        assert result.exit_code == 0, result.output
        assert logging.getLogger("ec2_snapper.jobs.delete_amis").level == logging.INFO
