"""ec2-snapper: create and prune AMIs of an EC2 instance."""

__version__ = "0.5.2"
