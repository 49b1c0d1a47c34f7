"""Shared pytest fixtures for the integration stamper test suite.

Provides reusable fixtures for:
- Sample domain specs (validated and raw)
- A stamper and the plan it produces for the sample domain
- Spec files on disk in JSON and YAML form
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from stamper.scaffolder import DomainSpec, ScaffoldPlan, TemplateStamper


# ---------------------------------------------------------------------------
# Specs
# ---------------------------------------------------------------------------

@pytest.fixture
def sales_spec_dict() -> dict[str, Any]:
    """Raw spec for the 'sales' domain with two workflows."""
    return {
        "name": "sales",
        "environments": ["dev", "sit", "uat", "prod"],
        "shared_prefix": "shared",
        "workflows": ["order-intake", "invoice-sync"],
    }


@pytest.fixture
def sales_spec(sales_spec_dict: dict[str, Any]) -> DomainSpec:
    """Validated DomainSpec for the 'sales' domain."""
    return DomainSpec.parse(sales_spec_dict)


# ---------------------------------------------------------------------------
# Stamper & plan
# ---------------------------------------------------------------------------

@pytest.fixture
def stamper() -> TemplateStamper:
    """A TemplateStamper using the packaged templates."""
    return TemplateStamper()


@pytest.fixture
def sales_plan(stamper: TemplateStamper, sales_spec: DomainSpec) -> ScaffoldPlan:
    """The plan produced for the 'sales' domain."""
    return stamper.generate(sales_spec)


# ---------------------------------------------------------------------------
# Spec files
# ---------------------------------------------------------------------------

@pytest.fixture
def spec_json_file(tmp_path: Path, sales_spec_dict: dict[str, Any]) -> Path:
    """The sales spec written as JSON."""
    path = tmp_path / "sales.json"
    path.write_text(json.dumps(sales_spec_dict), encoding="utf-8")
    return path


@pytest.fixture
def spec_yaml_file(tmp_path: Path, sales_spec_dict: dict[str, Any]) -> Path:
    """The sales spec written as YAML."""
    path = tmp_path / "sales.yaml"
    path.write_text(yaml.safe_dump(sales_spec_dict, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clean_stamper_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep STAMPER_* variables from the host out of every test."""
    for var in ("STAMPER_OUTPUT_DIR", "STAMPER_SHARED_PREFIX", "STAMPER_OVERWRITE"):
        monkeypatch.delenv(var, raising=False)
