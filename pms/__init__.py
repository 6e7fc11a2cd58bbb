"""Provider Management Service - role-scoped assignment of patients to providers."""

import logging
from typing import Optional

__version__ = "0.1.0"

from .config import config
from .core.exceptions import *
from .core.models import *
from .database import EntityDatabase, InMemoryDatabase
from .services import ProviderManagementService, RoleGraph


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for host applications that want default output."""
    logging.basicConfig(level=config.get_log_level(level))
