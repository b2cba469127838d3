"""
Shared fixtures: in-memory stand-ins for the boto3 EC2 and CloudWatch clients.
"""

import copy
from datetime import datetime, timedelta, timezone

import pytest
from botocore.exceptions import ClientError

from ec2_snapper.core.constants import INSTANCE_ID_TAG_KEY
from ec2_snapper.core.models import AMIInfo
from ec2_snapper.utils.config import ConfigManager

OWNER_ID = "123456789012"
NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def client_error(code, operation="Operation", message="error"):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


def aws_image(image_id, hours_old, instance_id="i-0abc", now=NOW, state="available", name=None):
    """A DescribeImages record created ``hours_old`` hours before ``now``."""
    created = now - timedelta(hours=hours_old)
    return {
        "ImageId": image_id,
        "Name": name or f"backup - {image_id}",
        "CreationDate": created.strftime("%Y-%m-%dT%H:%M:%S.000Z"),
        "OwnerId": OWNER_ID,
        "State": state,
        "Tags": [{"Key": INSTANCE_ID_TAG_KEY, "Value": instance_id}],
    }


def make_ami(image_id, hours_old, now=NOW):
    return AMIInfo.from_aws_image(aws_image(image_id, hours_old, now=now))


def aws_snapshot(snapshot_id, description, owner_id=OWNER_ID):
    return {
        "SnapshotId": snapshot_id,
        "Description": description,
        "OwnerId": owner_id,
        "VolumeId": "vol-0123",
        "VolumeSize": 8,
        "State": "completed",
    }


class FakePaginator:
    def __init__(self, client, page_size=1):
        self.client = client
        self.page_size = page_size

    def paginate(self, OwnerIds=None):
        self.client.calls.append(("describe_snapshots", {"OwnerIds": OwnerIds}))
        snapshots = [
            s for s in self.client.snapshots if not OwnerIds or s.get("OwnerId") in OwnerIds
        ]
        if not snapshots:
            yield {"Snapshots": []}
            return
        for start in range(0, len(snapshots), self.page_size):
            yield {"Snapshots": copy.deepcopy(snapshots[start:start + self.page_size])}


class FakeEC2Client:
    """Just enough of the EC2 API for ec2-snapper, including DryRun semantics."""

    def __init__(self, images=None, snapshots=None, instances=None):
        self.images = {image["ImageId"]: image for image in (images or [])}
        self.snapshots = list(snapshots or [])
        self.instances = list(instances or [])
        self.calls = []
        self.errors = {}
        self.invisible_polls = 0
        self.created_state = "pending"
        self._next_image = 1

    def _record(self, operation, **kwargs):
        self.calls.append((operation, kwargs))
        if operation in self.errors:
            raise self.errors[operation]

    def operations(self):
        return [operation for operation, _ in self.calls]

    def describe_instances(self, Filters=None):
        self._record("describe_instances", Filters=Filters)
        wanted = Filters[0]["Values"][0]
        matches = []
        for instance in self.instances:
            tags = {t["Key"]: t["Value"] for t in instance.get("Tags", [])}
            if tags.get("Name") == wanted:
                matches.append(instance)
        return {"Reservations": [{"Instances": matches}]}

    def describe_images(self, Owners=None, Filters=None, ImageIds=None):
        self._record("describe_images", Owners=Owners, Filters=Filters, ImageIds=ImageIds)
        if ImageIds:
            if self.invisible_polls > 0:
                self.invisible_polls -= 1
                raise client_error("InvalidAMIID.NotFound", "DescribeImages")
            return {"Images": [copy.deepcopy(self.images[i]) for i in ImageIds if i in self.images]}

        images = list(self.images.values())
        for flt in Filters or []:
            key = flt["Name"][len("tag:"):]
            images = [
                image for image in images
                if any(t["Key"] == key and t["Value"] in flt["Values"] for t in image.get("Tags", []))
            ]
        return {"Images": copy.deepcopy(images)}

    def create_image(self, InstanceId, Name, NoReboot=False, DryRun=False, Description=None):
        self._record("create_image", InstanceId=InstanceId, Name=Name, NoReboot=NoReboot,
                     DryRun=DryRun, Description=Description)
        if DryRun:
            raise client_error("DryRunOperation", "CreateImage",
                               "Request would have succeeded, but DryRun flag is set.")
        image_id = f"ami-new{self._next_image}"
        self._next_image += 1
        self.images[image_id] = {
            "ImageId": image_id,
            "Name": Name,
            "CreationDate": NOW.strftime("%Y-%m-%dT%H:%M:%S.000Z"),
            "OwnerId": OWNER_ID,
            "State": self.created_state,
            "Tags": [],
        }
        return {"ImageId": image_id}

    def create_tags(self, Resources, Tags):
        self._record("create_tags", Resources=Resources, Tags=Tags)
        for resource in Resources:
            if resource in self.images:
                self.images[resource]["Tags"].extend(copy.deepcopy(Tags))

    def deregister_image(self, ImageId, DryRun=False):
        self._record("deregister_image", ImageId=ImageId, DryRun=DryRun)
        if DryRun:
            raise client_error("DryRunOperation", "DeregisterImage",
                               "Request would have succeeded, but DryRun flag is set.")
        del self.images[ImageId]
        return {}

    def get_paginator(self, operation_name):
        assert operation_name == "describe_snapshots"
        return FakePaginator(self)

    def delete_snapshot(self, SnapshotId, DryRun=False):
        self._record("delete_snapshot", SnapshotId=SnapshotId, DryRun=DryRun)
        if DryRun:
            raise client_error("DryRunOperation", "DeleteSnapshot",
                               "Request would have succeeded, but DryRun flag is set.")
        self.snapshots = [s for s in self.snapshots if s["SnapshotId"] != SnapshotId]
        return {}


class FakeCloudWatchClient:
    def __init__(self):
        self.metric_data = []
        self.error = None

    def put_metric_data(self, Namespace, MetricData):
        if self.error:
            raise self.error
        self.metric_data.append({"Namespace": Namespace, "MetricData": MetricData})
        return {}


class FakeSession:
    """Stands in for boto3.Session, handing out the fake clients."""

    def __init__(self, ec2=None, cloudwatch=None):
        self.clients = {"ec2": ec2 or FakeEC2Client(), "cloudwatch": cloudwatch or FakeCloudWatchClient()}
        self.requested_regions = []

    def client(self, service_name, region_name=None):
        self.requested_regions.append(region_name)
        return self.clients[service_name]


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("LOG_PATH", str(tmp_path / "logs"))
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("EC2_SNAPPER_CONFIG_DIR", str(tmp_path / "configs"))
    monkeypatch.delenv("AWS_REGION", raising=False)


@pytest.fixture
def config_manager(tmp_path):
    return ConfigManager(config_dir=tmp_path / "configs")


@pytest.fixture
def two_image_fixture():
    """Two old AMIs of i-0abc, each backed by one snapshot."""
    images = [aws_image("ami-111", 48), aws_image("ami-222", 72)]
    snapshots = [
        aws_snapshot("snap-aaa", "Created by CreateImage(i-0abc) for ami-111 from vol-0123"),
        aws_snapshot("snap-bbb", "Created by CreateImage(i-0abc) for ami-222 from vol-0123"),
    ]
    ec2 = FakeEC2Client(images=images, snapshots=snapshots)
    return ec2, FakeSession(ec2=ec2)
