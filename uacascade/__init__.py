"""Классификация User-Agent: браузер, ОС и тип устройства."""

from .catalog import (
    Catalog,
    CatalogError,
    DEFAULT_BROWSER_IDENTIFIERS,
    DEFAULT_OS_IDENTIFIERS,
)
from .client_info import ClientInfo, DEVICE_TYPES
from .parser import LogParser
from .user_agent import UAParser, parse_user_agent

__version__ = "1.0.0"

__all__ = [
    "Catalog",
    "CatalogError",
    "ClientInfo",
    "DEFAULT_BROWSER_IDENTIFIERS",
    "DEFAULT_OS_IDENTIFIERS",
    "DEVICE_TYPES",
    "LogParser",
    "UAParser",
    "parse_user_agent",
]
