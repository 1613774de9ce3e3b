"""
Configuration settings for the workload metrics report.
"""
import logging
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from workload_metrics.errors import ConfigError

logger = logging.getLogger(__name__)

# (attribute, yaml key) in validation order
REQUIRED_FIELDS = (
    ("region", "region"),
    ("cluster_id", "clusterID"),
    ("namespace", "namespace"),
    ("secret_id", "secretID"),
    ("secret_key", "secretKey"),
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    APP_NAME: str = Field(default="tke-workload-metrics", description="Application name")
    LOG_LEVEL: str = Field(default="info", description="Log level: info|debug|warning")

    # Kubernetes Configuration
    K8S_CONTEXT: Optional[str] = Field(default=None, description="Kubernetes context")
    K8S_IN_CLUSTER: bool = Field(default=False, description="Running in cluster")
    K8S_PAGE_SIZE: int = Field(default=500, ge=1, description="Deployments per list call")

    # Monitoring Configuration
    MONITOR_ENDPOINT: str = Field(default="monitor.tencentcloudapi.com", description="Monitor API endpoint")
    MONITOR_NAMESPACE: str = Field(default="QCE/TKE2", description="Monitor product namespace")
    METRICS_PERIOD_SECS: int = Field(default=3600, description="Statistic period")
    REQUEST_TIMEOUT_SECS: int = Field(default=60, description="Request timeout")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


class Configuration(BaseModel):
    """Cluster and credential fields read from the YAML config file."""

    region: str = ""
    cluster_id: str = Field(default="", alias="clusterID")
    namespace: str = ""
    secret_id: str = Field(default="", alias="secretID")
    secret_key: str = Field(default="", alias="secretKey", repr=False)

    class Config:
        frozen = True
        populate_by_name = True

    @field_validator("*", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value

    def validate_required(self) -> None:
        """Raise ConfigError naming the first empty field."""
        for attr, key in REQUIRED_FIELDS:
            if not getattr(self, attr):
                raise ConfigError(f"{key} is required")


def load_config(path: str) -> Configuration:
    """
    Load and validate the YAML config file.

    Args:
        path: Path to the config file

    Returns:
        Validated Configuration
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            # BaseLoader keeps every scalar as written (no octal, bool or int resolution)
            data = yaml.load(f, Loader=yaml.BaseLoader)
    except OSError as e:
        raise ConfigError(f"Error reading config file: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Error unmarshaling YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Error unmarshaling YAML: expected a mapping, got {type(data).__name__}")

    try:
        configuration = Configuration.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Error unmarshaling YAML: {e}") from e

    configuration.validate_required()
    logger.debug(f"Loaded config for cluster {configuration.cluster_id} in {configuration.region}")
    return configuration


# Global settings instance
settings = Settings()
