"""
Configuration data models for mindcontext.

These models define the structure of ~/.mindcontext/config.json, with
validation and type safety via Pydantic.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

MACHINE_NAME_PATTERN = re.compile(r"^[a-z0-9-]+$")
MACHINE_ID_PATTERN = re.compile(r"^[a-f0-9]{8}$")


class MachineInfo(BaseModel):
    """
    Identity of the machine writing update records.

    The name is human readable; the id is a stable short hash that keeps
    update filenames unique across machines sharing a hostname.
    """

    name: str = Field(description="Sanitized lowercase hostname")
    id: str = Field(description="Stable 8-character hex machine id")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Machine names only use lowercase letters, digits and dashes."""
        if not MACHINE_NAME_PATTERN.match(v):
            raise ValueError(f"Invalid machine name: {v!r}")
        return v

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Machine ids are 8 lowercase hex characters."""
        if not MACHINE_ID_PATTERN.match(v):
            raise ValueError(f"Invalid machine id: {v!r}")
        return v


class ProjectConfig(BaseModel):
    """A project connected to mindcontext."""

    path: str = Field(description="Absolute path to the project directory")
    openspec: bool = Field(
        default=False,
        description="Whether the project used the openspec layout when connected",
    )
    category: str = Field(
        default="default",
        description="Free-form grouping shown on the dashboard",
    )


class SyncConfig(BaseModel):
    """
    Git remote settings for the dashboard repository.

    Push and pull are single bounded attempts; there is no retry backoff.
    """

    remote: str = Field(default="origin", description="Remote to push to and pull from")
    branch: str = Field(default="main", description="Branch of the dashboard repository")
    push_timeout: int = Field(
        default=30,
        ge=1,
        description="Seconds before a push attempt is abandoned",
    )
    pull_timeout: int = Field(
        default=60,
        ge=1,
        description="Seconds before a pull attempt is abandoned",
    )


class MindContextConfig(BaseModel):
    """
    Top-level mindcontext configuration.

    Loaded once per command, passed by value to the operations that need it
    and written back once at the end of the command.

    Example:
        >>> config = MindContextConfig(machine=MachineInfo(name="laptop", id="abc12345"))
        >>> config.projects
        {}
    """

    version: str = Field(default="1.0", description="Config format version")
    dashboard_repo: str = Field(
        default="",
        description="Clone URL of the dashboard repository",
    )
    dashboard_url: str = Field(
        default="",
        description="Web URL where the dashboard is published",
    )
    projects: dict[str, ProjectConfig] = Field(
        default_factory=dict,
        description="Connected projects keyed by project name",
    )
    machine: MachineInfo = Field(description="Identity of this machine")
    sync: SyncConfig = Field(
        default_factory=SyncConfig,
        description="Dashboard repository remote settings",
    )

    model_config = ConfigDict(
        extra="allow",  # Allow extra fields for forward compatibility
        validate_assignment=True,
    )

    def get_project(self, name: str) -> ProjectConfig | None:
        """Return the connected project with this name, if any."""
        return self.projects.get(name)

    def find_project_by_path(self, path: str) -> str | None:
        """Return the name of the project registered at ``path``."""
        for name, project in self.projects.items():
            if project.path == path:
                return name
        return None
