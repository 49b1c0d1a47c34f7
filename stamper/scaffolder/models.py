"""Pydantic v2 models for the integration scaffolder.

Defines the validated input (``DomainSpec``), the resource kinds the naming
convention knows about, and the ``ScaffoldPlan`` produced for one domain.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import InvalidSpec


# ---------------------------------------------------------------------------
# Naming character set
# ---------------------------------------------------------------------------

NAME_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

DEFAULT_ENVIRONMENTS: list[str] = ["dev", "sit", "uat", "prod"]
DEFAULT_SHARED_PREFIX = "shared"


def check_token(value: str, what: str) -> str:
    """Validate a single naming token and return it unchanged."""
    if not value:
        raise ValueError(f"{what} must not be empty")
    if not NAME_PATTERN.match(value):
        raise ValueError(
            f"{what} {value!r} may only contain lowercase letters, digits "
            "and single hyphens between them"
        )
    return value


def _check_unique(values: list[str], what: str) -> list[str]:
    seen: set[str] = set()
    for value in values:
        check_token(value, what)
        if value in seen:
            raise ValueError(f"duplicate {what} {value!r}")
        seen.add(value)
    return values


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ResourceKind(str, Enum):
    """Cloud resources named by the convention."""
    RESOURCE_GROUP = "resource_group"
    KEY_VAULT = "key_vault"
    FUNCTION_APP = "function_app"
    LOGIC_APP = "logic_app"
    STORAGE_ACCOUNT = "storage_account"
    APP_INSIGHTS = "app_insights"
    SERVICE_BUS = "service_bus"
    API_MANAGEMENT = "api_management"
    LOG_ANALYTICS = "log_analytics"

    @property
    def shared(self) -> bool:
        """Whether the resource belongs to the shared platform, not a domain."""
        return self in _SHARED_KINDS


_SHARED_KINDS = frozenset({
    ResourceKind.SERVICE_BUS,
    ResourceKind.API_MANAGEMENT,
    ResourceKind.LOG_ANALYTICS,
})


# ---------------------------------------------------------------------------
# Input model
# ---------------------------------------------------------------------------

class DomainSpec(BaseModel):
    """A team domain and the environments it deploys to."""
    name: str = Field(..., description="Domain token, e.g. 'sales'")
    environments: list[str] = Field(
        ..., description="Ordered deployment stages, e.g. ['dev', 'prod']"
    )
    shared_prefix: str = Field(
        default=DEFAULT_SHARED_PREFIX,
        description="Naming token for resources shared across domains",
    )
    workflows: list[str] = Field(
        default_factory=list,
        description="Logical workflow names; one workflow.json is stamped per entry",
    )

    @field_validator("name")
    @classmethod
    def _valid_name(cls, value: str) -> str:
        return check_token(value, "domain name")

    @field_validator("shared_prefix")
    @classmethod
    def _valid_prefix(cls, value: str) -> str:
        return check_token(value, "shared prefix")

    @field_validator("environments")
    @classmethod
    def _valid_environments(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("at least one environment is required")
        return _check_unique(value, "environment")

    @field_validator("workflows")
    @classmethod
    def _valid_workflows(cls, value: list[str]) -> list[str]:
        return _check_unique(value, "workflow")

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "DomainSpec":
        """Validate a raw mapping, raising ``InvalidSpec`` on any failure.

        The error names the first offending field so callers can point the
        user at it directly.
        """
        if not isinstance(data, Mapping):
            raise InvalidSpec("spec", f"expected a mapping, got {type(data).__name__}")
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise _to_invalid_spec(exc) from exc


def _to_invalid_spec(exc: ValidationError) -> InvalidSpec:
    error = exc.errors()[0]
    loc = error.get("loc") or ("spec",)
    field = str(loc[0])
    cause = (error.get("ctx") or {}).get("error")
    message = str(cause) if cause is not None else error.get("msg", "invalid value")
    return InvalidSpec(field, message)


# ---------------------------------------------------------------------------
# Plan models
# ---------------------------------------------------------------------------

class PlannedFile(BaseModel):
    """One file of a scaffold plan, relative to the output root."""
    path: str = Field(..., description="Relative POSIX path, e.g. 'sales/dev.parameters.json'")
    content: str = Field(default="", description="Full UTF-8 file content")

    @field_validator("path")
    @classmethod
    def _relative_path(cls, value: str) -> str:
        if not value or "\\" in value:
            raise ValueError(f"invalid plan path {value!r}")
        posix = PurePosixPath(value)
        if posix.is_absolute() or ".." in posix.parts:
            raise ValueError(f"plan path {value!r} must stay inside the output root")
        return value


class ScaffoldPlan(BaseModel):
    """Ordered files to create for one domain, plus the names they use.

    Built fresh by ``TemplateStamper.generate`` and handed to ``PlanWriter``;
    never persisted.
    """
    domain: str
    environments: list[str] = Field(default_factory=list)
    files: list[PlannedFile] = Field(default_factory=list)
    resources: dict[str, dict[str, str]] = Field(
        default_factory=dict,
        description="Resolved resource names keyed by environment, then kind",
    )

    def __len__(self) -> int:
        return len(self.files)

    def paths(self) -> list[str]:
        """Return every planned path in emission order."""
        return [f.path for f in self.files]

    def get(self, path: str) -> Optional[PlannedFile]:
        """Return the planned file at *path*, or ``None``."""
        for planned in self.files:
            if planned.path == path:
                return planned
        return None

    def parameter_files(self) -> list[PlannedFile]:
        """Return the per-environment parameter files."""
        return [f for f in self.files if f.path.endswith(".parameters.json")]

    def resource_name(self, environment: str, kind: ResourceKind) -> str:
        """Look up one resolved resource name."""
        return self.resources[environment][kind.value]
