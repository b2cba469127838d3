#!/usr/bin/env python3
"""
utils/session.py

Session management utilities for AWS interactions.

Provides functions and classes to handle AWS session creation and role assumption.
"""

import boto3
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from .exceptions import (
    AuthError,
    ExternalServiceError,
    NO_CREDENTIALS_MESSAGE,
    ValidationError,
    ValidationRules,
)
from .logger import setup_logger

logger = setup_logger(__name__, "session.log")


def assume_role(
    account_id: str,
    role: str,
    region: str,
    role_session_name: str = "ec2-snapper",
) -> boto3.Session:
    """Assumes a specified role in an AWS account and returns a boto3 Session."""
    if not ValidationRules.validate_aws_account_id(account_id):
        raise ValidationError(f"Invalid AWS account ID: {account_id}. Must be 12 digits.")

    role_arn = f"arn:aws:iam::{account_id}:role/{role}"

    try:
        sts_client = boto3.client("sts", region_name=region)
        response = sts_client.assume_role(
            RoleArn=role_arn, RoleSessionName=role_session_name
        )
        credentials = response["Credentials"]

        return boto3.Session(
            aws_access_key_id=credentials["AccessKeyId"],
            aws_secret_access_key=credentials["SecretAccessKey"],
            aws_session_token=credentials["SessionToken"],
            region_name=region,
        )
    except NoCredentialsError as e:
        raise AuthError(NO_CREDENTIALS_MESSAGE) from e
    except ClientError as e:
        error_code = e.response["Error"]["Code"]
        raise AuthError(f"Failed to assume role {role_arn}: {error_code} - {e}") from e
    except BotoCoreError as e:
        raise ExternalServiceError(f"Unexpected error assuming role {role_arn}: {e}") from e


class SessionManager:
    """Manages AWS sessions for role assumption and credential handling."""

    @classmethod
    def get_session(
        cls,
        account_id: str,
        role: str,
        region: str,
        role_session_name: str = "ec2-snapper",
    ) -> boto3.Session:
        """Create a boto3 Session for the specified AWS role."""
        logger.debug(f"Assuming role {role} in account {account_id} ({region})")
        return assume_role(account_id, role, region, role_session_name)

    @classmethod
    def get_default_session(cls, region: str) -> boto3.Session:
        """Create a boto3 Session from the default credential chain.

        The chain covers environment variables (AWS_ACCESS_KEY_ID,
        AWS_SECRET_ACCESS_KEY, AWS_SESSION_TOKEN), shared config files and
        instance profiles. Raises AuthError when none of them yields credentials.
        """
        session = boto3.Session(region_name=region)
        if session.get_credentials() is None:
            raise AuthError(NO_CREDENTIALS_MESSAGE)
        return session
