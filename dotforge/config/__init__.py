from .catalog import DEFAULT_BASE_URL, default_catalog
from .loader import load_catalog
from .settings import InstallSettings
from .types import Catalog, ConfigError, RepoSpec, UnsupportedConfigFormatError

__all__ = [
    "load_catalog",
    "default_catalog",
    "DEFAULT_BASE_URL",
    "Catalog",
    "RepoSpec",
    "InstallSettings",
    "ConfigError",
    "UnsupportedConfigFormatError",
]
