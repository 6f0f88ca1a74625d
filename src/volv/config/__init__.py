"""Configuration loading, schema, defaults and directory bootstrap."""

from volv.config.bootstrap import bootstrap, project_reports_dir
from volv.config.loader import ConfigError, load_config
from volv.config.schema import ReportFormat, VolvConfig

__all__ = [
    "ConfigError",
    "ReportFormat",
    "VolvConfig",
    "bootstrap",
    "load_config",
    "project_reports_dir",
]
