"""Load and validate the migration configuration.

This subpackage turns an optional ``migrate.yaml`` into a
:class:`MigrationConfig` describing where legacy content lives, where it goes,
and which landing pages get menu placement. Without a file the defaults
reproduce the Jekyll to Hugo move of the Kubernetes website.

Examples
--------
>>> from pathlib import Path
>>> from docs_migrate.config import load_migration_config
>>> config = load_migration_config(None, project_root=Path("/srv/website"))
>>> config.copy_dirs[0].destination
'content/en/docs'
"""

from .loader import load_migration_config
from .models import (
    DirMapping,
    LayoutOverride,
    MigrationConfig,
    MigrationConfigError,
    RenameRule,
    TemplateInclude,
)

__all__ = [
    "DirMapping",
    "LayoutOverride",
    "MigrationConfig",
    "MigrationConfigError",
    "RenameRule",
    "TemplateInclude",
    "load_migration_config",
]
