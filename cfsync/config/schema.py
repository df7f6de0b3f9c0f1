# CFSync Configuration Schema
# Pydantic models for YAML configuration validation

from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from cfsync.graph.resolver import DEFAULT_MAX_DEPTH
from cfsync.sync.history import DEFAULT_HISTORY_LIMIT
from cfsync.utils.files import expand_path


class SpaceConfig(BaseModel):
    """The content space being synchronized."""

    id: str = Field(description="Space identifier")
    name: str = Field(default="", description="Human-readable space name")


class EnvironmentConfig(BaseModel):
    """A single environment of the space."""

    export_path: str = Field(description="Export file holding the environment (JSON or YAML)")
    description: str = Field(default="", description="Human-readable description")

    @field_validator("export_path")
    @classmethod
    def expand_export_path(cls, v: str) -> str:
        """Expand ~ and environment variables in path."""
        return str(expand_path(v))


class SyncSettings(BaseModel):
    """Default source and target for sync operations."""

    source: str = Field(description="Environment to read from")
    target: str = Field(description="Environment to write to")
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, description="Maximum link depth to follow")


class OutputConfig(BaseModel):
    """Output and history configuration."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")
    history_file: str | None = Field(default=None, description="Path to sync history file")
    history_limit: int = Field(default=DEFAULT_HISTORY_LIMIT, ge=0, description="Runs kept in history (0 = all)")

    @field_validator("history_file")
    @classmethod
    def expand_optional_path(cls, v: str | None) -> str | None:
        """Expand ~ and environment variables in optional path."""
        if v is None:
            return None
        return str(expand_path(v))


class CfsyncConfig(BaseModel):
    """Root configuration model for CFSync."""

    space: SpaceConfig = Field(description="Space settings")
    environments: dict[str, EnvironmentConfig] = Field(default_factory=dict, description="Environment definitions")
    sync: SyncSettings = Field(description="Sync settings")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    @model_validator(mode="after")
    def check_environments(self) -> "CfsyncConfig":
        """Source and target must be defined and must differ."""
        for role in ("source", "target"):
            name = getattr(self.sync, role)
            if name not in self.environments:
                raise ValueError(f"sync.{role} refers to undefined environment '{name}'")
        if self.sync.source == self.sync.target:
            raise ValueError("sync.source and sync.target must be different environments")
        return self

    def get_environment(self, name: str) -> EnvironmentConfig | None:
        """Get an environment by name."""
        return self.environments.get(name)

    def get_export_path(self, name: str) -> Path:
        """
        Get the export path of an environment.

        Raises:
            KeyError: If the environment doesn't exist.
        """
        environment = self.environments.get(name)
        if environment is None:
            raise KeyError(f"Environment '{name}' not found in configuration")
        return Path(environment.export_path)
