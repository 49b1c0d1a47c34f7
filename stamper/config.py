"""Integration stamper configuration.

Typed settings for the CLI plus the loader for domain spec files.  Settings
use Pydantic v2 models so they are validated at construction time and can be
read from a JSON file or from environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from stamper.scaffolder.errors import InvalidSpec
from stamper.scaffolder.models import DEFAULT_SHARED_PREFIX, DomainSpec
from stamper.utils import load_json, load_yaml

_TRUE_VALUES = {"1", "true", "yes", "on"}


class StamperConfig(BaseModel):
    """Settings that apply to every stamping run."""

    output_dir: Path = Field(default=Path("."), description="Root the plan is written below")
    shared_prefix: str = Field(
        default=DEFAULT_SHARED_PREFIX,
        min_length=1,
        description="Default prefix for shared platform resources",
    )
    overwrite: bool = Field(default=False, description="Replace files that already exist")

    @classmethod
    def load(cls, path: Path) -> "StamperConfig":
        """Load a configuration from JSON.

        Args:
            path: The JSON file to read, e.g. the CLI's ``--config`` value.

        Returns:
            A validated ``StamperConfig`` instance.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "StamperConfig":
        """Build a ``StamperConfig`` from environment variables.

        Recognised variables (all optional):
            STAMPER_OUTPUT_DIR, STAMPER_SHARED_PREFIX, STAMPER_OVERWRITE.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("STAMPER_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["STAMPER_OUTPUT_DIR"])
        if os.environ.get("STAMPER_SHARED_PREFIX"):
            kwargs["shared_prefix"] = os.environ["STAMPER_SHARED_PREFIX"]
        if os.environ.get("STAMPER_OVERWRITE"):
            kwargs["overwrite"] = os.environ["STAMPER_OVERWRITE"].strip().lower() in _TRUE_VALUES
        return cls(**kwargs)


# ---------------------------------------------------------------------------
# Domain spec files
# ---------------------------------------------------------------------------


def read_spec_file(path: str | Path) -> dict[str, Any]:
    """Read the raw mapping from a ``.json``, ``.yaml`` or ``.yml`` spec file.

    An empty YAML document reads as an empty mapping.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidSpec: If the extension is unsupported or the top level is not
            a mapping.
    """
    spec_path = Path(path)
    suffix = spec_path.suffix.lower()
    if suffix == ".json":
        data = load_json(spec_path)
    elif suffix in (".yaml", ".yml"):
        data = load_yaml(spec_path)
        if data is None:
            data = {}
    else:
        raise InvalidSpec("spec", f"unsupported spec file type {suffix or '(none)'!r}")
    if not isinstance(data, dict):
        raise InvalidSpec(
            "spec",
            f"{spec_path} must contain a mapping at the top level, got {type(data).__name__}",
        )
    return data


def merge_spec(
    data: Mapping[str, Any],
    defaults: Optional[Mapping[str, Any]] = None,
    **overrides: Any,
) -> DomainSpec:
    """Validate *data* layered over *defaults* and under *overrides*.

    Override values of ``None`` are ignored so unset CLI flags fall through.
    """
    merged: dict[str, Any] = dict(defaults or {})
    merged.update(data)
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return DomainSpec.parse(merged)


def load_domain_spec(
    path: str | Path,
    defaults: Optional[Mapping[str, Any]] = None,
    **overrides: Any,
) -> DomainSpec:
    """Load and validate a domain spec file; see :func:`merge_spec`."""
    return merge_spec(read_spec_file(path), defaults, **overrides)
