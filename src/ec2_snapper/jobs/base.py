"""Base job class for ec2-snapper operations."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import boto3
import uuid
from ec2_snapper.core.aws import CloudWatchManager, EC2Manager
from ec2_snapper.utils.config import ConfigManager
from ec2_snapper.utils.exceptions import ValidationError
from ec2_snapper.utils.logger import set_console_level, setup_logger
from ec2_snapper.utils.session import SessionManager


class BaseJob(ABC):
    """Base class for all ec2-snapper jobs."""

    # Class-level configuration cache
    _config_manager: Optional[ConfigManager] = None

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        job_name: str = None,
        session: Optional[boto3.Session] = None,
        log_level: Optional[str] = None,
    ):
        """Initialize the job with configuration.

        Args:
            config_manager: Configuration to use (a shared one is created otherwise)
            job_name: Name used for the log file and STS session name
            session: Pre-built boto3 session; skips credential resolution
            log_level: Overrides the configured level (DEBUG for --verbose)
        """
        if config_manager is not None:
            self.config_manager = config_manager
        else:
            self.config_manager = self._get_or_create_config_manager()

        self.job_name = job_name or self.__class__.__name__.lower().replace('job', '')
        self.correlation_id = str(uuid.uuid4())[:8]  # Short correlation ID for tracking
        self._session = session
        self.log_level = (log_level or self.config_manager.get_logging_level()).upper()

        self.logger = setup_logger(
            name=self.__class__.__module__,
            log_file=f"{self.job_name}.log",
            level=self.log_level,
            log_dir=self.config_manager.get_logging_path(),
        )

    @classmethod
    def _get_or_create_config_manager(cls) -> ConfigManager:
        """Get or create a cached ConfigManager instance."""
        if cls._config_manager is None:
            cls._config_manager = ConfigManager()
        return cls._config_manager

    def log(self, message: str, level: str = "info") -> None:
        """Log a message tagged with this job's correlation id."""
        getattr(self.logger, level)(f"[{self.correlation_id}] {message}")

    def resolve_region(self, region: Optional[str]) -> str:
        """Use the --region argument, falling back to configuration."""
        region = region or self.config_manager.get_aws_region()
        if not region:
            raise ValidationError("The argument '--region' is required.")
        return region

    def create_aws_session(self, region: str) -> boto3.Session:
        """
        Create AWS session for the region, assuming the configured role if any
        """
        if self._session is not None:
            return self._session

        role_name = self.config_manager.get_role()
        account_id = self.config_manager.get_account_id()

        if role_name and account_id:
            self.log(f"Assuming role {role_name} in account {account_id} ({region})")
            self._session = SessionManager.get_session(
                account_id=account_id,
                role=role_name,
                region=region,
                role_session_name=f"ec2-snapper-{self.job_name}",
            )
        else:
            self.log(f"Using default AWS credentials in {region}", "debug")
            self._session = SessionManager.get_default_session(region=region)
        return self._session

    def create_ec2_manager(self, region: str) -> EC2Manager:
        manager = EC2Manager(self.create_aws_session(region), region)
        set_console_level(manager.logger, self.log_level)
        return manager

    def create_cloudwatch_manager(self, region: str) -> CloudWatchManager:
        manager = CloudWatchManager(self.create_aws_session(region), region)
        set_console_level(manager.logger, self.log_level)
        return manager

    @abstractmethod
    def execute(self, **kwargs) -> Dict[str, Any]:
        """Execute the job with given parameters."""
        pass
