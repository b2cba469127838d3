"""
Tests for the AMI and snapshot data models.
"""

from datetime import datetime, timezone

from ec2_snapper.core.constants import INSTANCE_ID_TAG_KEY
from ec2_snapper.core.models import AMIInfo, SnapshotInfo, parse_creation_date
from conftest import NOW, aws_image, aws_snapshot


class TestAMIInfo:
    def test_from_aws_image(self):
        image = AMIInfo.from_aws_image(aws_image("ami-111", 10, instance_id="i-0abc"))

        assert image.image_id == "ami-111"
        assert image.owner_id == "123456789012"
        assert image.instance_tag == "i-0abc"
        assert image.get_tag(INSTANCE_ID_TAG_KEY) == "i-0abc"
        assert image.is_available
        assert image.age_hours(NOW) == 10.0

    def test_failed_state(self):
        image = AMIInfo.from_aws_image(aws_image("ami-111", 1, state="failed"))
        assert image.is_failed
        assert not image.is_available

    def test_untagged_image(self):
        record = aws_image("ami-111", 1)
        record["Tags"] = []
        assert AMIInfo.from_aws_image(record).instance_tag == ""

    def test_parse_creation_date(self):
        assert parse_creation_date("2024-05-01T13:04:05.000Z") == datetime(
            2024, 5, 1, 13, 4, 5, tzinfo=timezone.utc
        )
        assert parse_creation_date("2024-05-01T13:04:05") == datetime(
            2024, 5, 1, 13, 4, 5, tzinfo=timezone.utc
        )


class TestSnapshotInfo:
    def test_from_aws_snapshot(self):
        snapshot = SnapshotInfo.from_aws_snapshot(aws_snapshot("snap-1", "for ami-111"))

        assert snapshot.snapshot_id == "snap-1"
        assert snapshot.description == "for ami-111"
        assert snapshot.owner_id == "123456789012"
        assert snapshot.is_completed

    def test_missing_description(self):
        record = aws_snapshot("snap-1", None)
        assert SnapshotInfo.from_aws_snapshot(record).description == ""
