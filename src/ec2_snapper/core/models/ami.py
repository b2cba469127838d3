"""Simple data models for AWS AMI management."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Any

from ec2_snapper.core.constants import INSTANCE_ID_TAG_KEY


class AMIState(Enum):
    """AMI states."""
    PENDING = "pending"
    AVAILABLE = "available"
    INVALID = "invalid"
    FAILED = "failed"


def parse_creation_date(value: Any) -> datetime:
    """Parse an AMI CreationDate (e.g. '2024-05-01T13:04:05.000Z') into an aware datetime."""
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class AMIInfo:
    """Simple AMI information model."""
    image_id: str
    name: str
    creation_date: datetime
    owner_id: str = ""
    state: str = AMIState.AVAILABLE.value
    tags: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    @property
    def is_available(self) -> bool:
        return self.state == AMIState.AVAILABLE.value

    @property
    def is_failed(self) -> bool:
        return self.state == AMIState.FAILED.value

    @property
    def instance_tag(self) -> str:
        """Id of the instance this AMI was created from."""
        return self.get_tag(INSTANCE_ID_TAG_KEY)

    def get_tag(self, key: str, default: str = "") -> str:
        return self.tags.get(key, default)

    def age_hours(self, now: datetime) -> float:
        """Age of the image at ``now``, in fractional hours."""
        return (now - self.creation_date).total_seconds() / 3600.0

    @classmethod
    def from_aws_image(cls, image: Dict[str, Any]) -> "AMIInfo":
        """Create AMIInfo from AWS image data."""
        # Extract tags
        tags = {}
        for tag in image.get("Tags", []):
            if tag.get("Key"):
                tags[tag["Key"]] = tag.get("Value", "")

        return cls(
            image_id=image["ImageId"],
            name=image.get("Name", ""),
            creation_date=parse_creation_date(image["CreationDate"]),
            owner_id=image.get("OwnerId", ""),
            state=image.get("State", AMIState.AVAILABLE.value),
            tags=tags,
        )
