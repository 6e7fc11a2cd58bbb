"""Configuration for Provider Management Service."""

import os
from typing import Optional


class Config:
    """Configuration class for pms."""

    # UUID of the provider attribute type whose value holds the provider role
    DEFAULT_PROVIDER_ROLE_ATTRIBUTE_TYPE_UUID = "0c267ae8-f793-4cf8-9b27-451ddc8ee8a1"

    DEFAULT_LOG_LEVEL = "INFO"

    @classmethod
    def get_provider_role_attribute_type_uuid(
        cls, override_uuid: Optional[str] = None
    ) -> str:
        """Get the UUID of the provider role attribute type.

        Args:
            override_uuid: Optional UUID to use instead of the configured one

        Returns:
            The attribute type UUID
        """
        if override_uuid:
            return override_uuid

        env_uuid = os.getenv("PMS_PROVIDER_ROLE_ATTRIBUTE_TYPE_UUID")
        if env_uuid:
            return env_uuid

        return cls.DEFAULT_PROVIDER_ROLE_ATTRIBUTE_TYPE_UUID

    @classmethod
    def get_log_level(cls, override_level: Optional[str] = None) -> str:
        """Get the log level name used by :func:`pms.configure_logging`."""
        level = override_level or os.getenv("PMS_LOG_LEVEL") or cls.DEFAULT_LOG_LEVEL
        return level.upper()


# Global configuration instance
config = Config()
