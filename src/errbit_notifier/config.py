"""Configuration loading for errbit-notifier."""

import os
import platform
import socket
from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_HOST = "https://api.airbrake.io"


# platform.system() names mapped to the OS names other Airbrake notifiers report
_OS_NAMES = {"darwin": "macos"}


def _detect_os() -> str | None:
    system = platform.system().lower()
    return _OS_NAMES.get(system, system) or None


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


def _detect_hostname() -> str | None:
    try:
        return socket.gethostname() or None
    except OSError:
        return None


def _detect_root_directory() -> str | None:
    try:
        return os.getcwd()
    except OSError:
        return None


@dataclass
class Config:
    """Notifier configuration.

    Collector settings come from AIRBRAKE_* environment variables; the app_*
    fields describe the reporting process and populate notice contexts.
    """

    host: str = DEFAULT_HOST
    project_id: str = "0"
    project_key: str = "0"
    environment: str | None = None

    app_os: str | None = field(default_factory=_detect_os)
    app_hostname: str | None = field(default_factory=_detect_hostname)
    app_language: str | None = None
    app_version: str | None = None
    app_root_directory: str | None = field(default_factory=_detect_root_directory)

    @property
    def endpoint(self) -> str:
        """Return the notice creation URL for this project."""
        return (
            f"{self.host}/api/v3/projects/{self.project_id}/notices"
            f"?key={self.project_key}"
        )

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            host=os.environ.get("AIRBRAKE_HOST", DEFAULT_HOST),
            project_id=os.environ.get("AIRBRAKE_PROJECT_ID", "0"),
            project_key=os.environ.get("AIRBRAKE_API_KEY", "0"),
            environment=os.environ.get("AIRBRAKE_ENVIRONMENT"),
        )

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Load configuration from YAML file, with env var overrides.

        The file may hold an ``airbrake`` section (host, project_id,
        project_key, environment) and an ``app`` section (os, hostname,
        language, version, root_directory).
        """
        config = cls.from_env()

        if path.exists():
            with open(path) as f:
                data = yaml.safe_load(f)

            if data and "airbrake" in data:
                ab = data["airbrake"]
                if "AIRBRAKE_HOST" not in os.environ:
                    config.host = ab.get("host", config.host)
                if "AIRBRAKE_PROJECT_ID" not in os.environ:
                    config.project_id = str(ab.get("project_id", config.project_id))
                if "AIRBRAKE_API_KEY" not in os.environ:
                    config.project_key = str(ab.get("project_key", config.project_key))
                if "AIRBRAKE_ENVIRONMENT" not in os.environ:
                    config.environment = _optional_str(ab.get("environment", config.environment))

            if data and "app" in data:
                app = data["app"]
                config.app_os = _optional_str(app.get("os", config.app_os))
                config.app_hostname = _optional_str(app.get("hostname", config.app_hostname))
                config.app_language = _optional_str(app.get("language", config.app_language))
                config.app_version = _optional_str(app.get("version", config.app_version))
                config.app_root_directory = _optional_str(
                    app.get("root_directory", config.app_root_directory)
                )

        return config
