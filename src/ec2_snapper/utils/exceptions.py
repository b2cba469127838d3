"""Exception classes and validation utilities for ec2-snapper.

This module contains the error taxonomy surfaced by the CLI and the
validation rules shared by jobs before any AWS call is made.
"""

import re


class CLIError(Exception):
    """Custom exception for CLI-related errors."""

    pass


class SnapperError(CLIError):
    """Base class for every error reported by ec2-snapper commands."""

    pass


class ValidationError(SnapperError):
    """Bad or missing command-line arguments."""

    pass


class AuthError(SnapperError):
    """AWS credentials are missing or were rejected."""

    pass


class NotFoundError(SnapperError):
    """An instance name or an instance's AMIs could not be resolved."""

    pass


class InvalidFormatError(SnapperError):
    """A relative age expression such as '30d' is malformed."""

    pass


class ExternalServiceError(SnapperError):
    """Any other failure reported by an AWS API call."""

    pass


NO_CREDENTIALS_MESSAGE = (
    "No AWS credentials were found. Either set the environment variables "
    "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY, or run this program on an "
    "EC2 instance that has an IAM Role with the appropriate permissions."
)


class ValidationRules:
    """Validation utilities for command arguments."""

    @staticmethod
    def validate_aws_account_id(account_id: str) -> bool:
        """Validate AWS account ID format (12 digits)."""
        return bool(re.match(r"^\d{12}$", account_id))

    @staticmethod
    def require(value, option: str) -> None:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"The argument '{option}' is required.")

    @staticmethod
    def require_exactly_one(instance_id, instance_name) -> None:
        """Exactly one of --instance-id / --instance-name must be supplied."""
        if bool(instance_id) == bool(instance_name):
            raise ValidationError(
                "You must specify exactly one of '--instance-id' or '--instance-name'."
            )

    @staticmethod
    def require_non_negative(value: int, option: str) -> None:
        if value is None or value < 0:
            raise ValidationError(
                f"The argument '{option}' must be a non-negative integer."
            )
