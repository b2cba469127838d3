#!/usr/bin/env python3
"""Core constants for ec2-snapper."""

# Tag linking every created AMI back to its source instance
INSTANCE_ID_TAG_KEY = "ec2-snapper-instance-id"
NAME_TAG_KEY = "Name"

# AMI naming, e.g. "web - 2024-05-01 at 13_04_05 (UTC)"
AMI_NAME_TIMESTAMP_FORMAT = "%Y-%m-%d at %H_%M_%S (%Z)"

# AWS error codes
DRY_RUN_ERROR_CODE = "DryRunOperation"
AMI_NOT_FOUND_ERROR_CODES = ("InvalidAMIID.NotFound", "InvalidAMIID.Unavailable")
AUTH_ERROR_CODES = (
    "AuthFailure",
    "UnrecognizedClientException",
    "InvalidClientTokenId",
    "SignatureDoesNotMatch",
    "ExpiredToken",
)

# Instance states ignored when resolving an instance by name
IGNORED_INSTANCE_STATES = ("terminated", "shutting-down")

# Image creation polling
DEFAULT_POLL_INTERVAL_SECONDS = 2.0
DEFAULT_POLL_TIMEOUT_SECONDS = 60.0

# CloudWatch metric defaults
DEFAULT_METRIC_VALUE = 1.0
DEFAULT_METRIC_UNIT = "Count"
