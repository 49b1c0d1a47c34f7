"""Tests for the scaffolder models.

Covers:
- DomainSpec validation of name, environments, shared prefix and workflows
- DomainSpec.parse translating validation failures into InvalidSpec
- PlannedFile path safety
- ScaffoldPlan helpers
- ResourceKind shared/domain split
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from stamper.scaffolder.errors import InvalidSpec
from stamper.scaffolder.models import (
    DEFAULT_SHARED_PREFIX,
    DomainSpec,
    PlannedFile,
    ResourceKind,
    ScaffoldPlan,
    check_token,
)


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# check_token
# ---------------------------------------------------------------------------


class TestCheckToken:
    @pytest.mark.parametrize("token", ["sales", "hr", "it2", "order-intake", "a"])
    def test_valid_tokens(self, token: str):
        assert check_token(token, "domain name") == token

    @pytest.mark.parametrize(
        "token", ["Sales", "sales!", "sales_ops", "-sales", "sales-", "sa--les", "sa les"]
    )
    def test_invalid_tokens(self, token: str):
        with pytest.raises(ValueError, match="lowercase letters"):
            check_token(token, "domain name")

    def test_empty_token(self):
        with pytest.raises(ValueError, match="must not be empty"):
            check_token("", "environment")


# ---------------------------------------------------------------------------
# DomainSpec
# ---------------------------------------------------------------------------


class TestDomainSpec:
    def test_minimal_spec_defaults(self):
        spec = DomainSpec(name="sales", environments=["dev"])
        assert spec.shared_prefix == DEFAULT_SHARED_PREFIX
        assert spec.workflows == []

    def test_environment_order_preserved(self):
        spec = DomainSpec(name="sales", environments=["prod", "dev", "uat"])
        assert spec.environments == ["prod", "dev", "uat"]

    def test_direct_construction_raises_validation_error(self):
        with pytest.raises(ValidationError):
            DomainSpec(name="Sales!", environments=["dev"])

    def test_parse_valid(self):
        spec = DomainSpec.parse({"name": "hr", "environments": ["dev", "prod"]})
        assert spec.name == "hr"

    def test_parse_invalid_name(self):
        with pytest.raises(InvalidSpec) as exc_info:
            DomainSpec.parse({"name": "Sales!", "environments": ["dev"]})
        assert exc_info.value.field == "name"
        assert "Sales!" in str(exc_info.value)

    def test_parse_empty_environments(self):
        with pytest.raises(InvalidSpec) as exc_info:
            DomainSpec.parse({"name": "hr", "environments": []})
        assert exc_info.value.field == "environments"
        assert "at least one environment" in exc_info.value.message

    def test_parse_duplicate_environments(self):
        with pytest.raises(InvalidSpec) as exc_info:
            DomainSpec.parse({"name": "it", "environments": ["dev", "dev"]})
        assert exc_info.value.field == "environments"
        assert "duplicate" in exc_info.value.message

    def test_parse_invalid_environment_name(self):
        with pytest.raises(InvalidSpec) as exc_info:
            DomainSpec.parse({"name": "it", "environments": ["DEV"]})
        assert exc_info.value.field == "environments"

    def test_parse_missing_name(self):
        with pytest.raises(InvalidSpec) as exc_info:
            DomainSpec.parse({"environments": ["dev"]})
        assert exc_info.value.field == "name"

    def test_parse_invalid_prefix(self):
        with pytest.raises(InvalidSpec) as exc_info:
            DomainSpec.parse({"name": "it", "environments": ["dev"], "shared_prefix": "Shared"})
        assert exc_info.value.field == "shared_prefix"

    def test_parse_duplicate_workflows(self):
        with pytest.raises(InvalidSpec) as exc_info:
            DomainSpec.parse({
                "name": "it",
                "environments": ["dev"],
                "workflows": ["sync", "sync"],
            })
        assert exc_info.value.field == "workflows"

    def test_parse_rejects_non_mapping(self):
        with pytest.raises(InvalidSpec) as exc_info:
            DomainSpec.parse(["sales"])  # type: ignore[arg-type]
        assert exc_info.value.field == "spec"

    def test_invalid_spec_is_value_error(self):
        with pytest.raises(ValueError):
            DomainSpec.parse({"name": "hr", "environments": []})


# ---------------------------------------------------------------------------
# PlannedFile / ScaffoldPlan
# ---------------------------------------------------------------------------


class TestPlannedFile:
    def test_relative_path_accepted(self):
        planned = PlannedFile(path="sales/dev.parameters.json", content="{}")
        assert planned.path == "sales/dev.parameters.json"

    @pytest.mark.parametrize("path", ["/etc/passwd", "../outside.json", "sales/../../x", "a\\b", ""])
    def test_unsafe_paths_rejected(self, path: str):
        with pytest.raises(ValidationError):
            PlannedFile(path=path)


class TestScaffoldPlan:
    def test_helpers(self):
        plan = ScaffoldPlan(
            domain="sales",
            environments=["dev"],
            files=[
                PlannedFile(path="sales/dev.parameters.json", content="{}"),
                PlannedFile(path="pipeline.yaml", content="stages: []\n"),
            ],
            resources={"dev": {"resource_group": "rg-sales-dev"}},
        )
        assert len(plan) == 2
        assert plan.paths() == ["sales/dev.parameters.json", "pipeline.yaml"]
        assert plan.get("pipeline.yaml").content == "stages: []\n"
        assert plan.get("missing.json") is None
        assert [f.path for f in plan.parameter_files()] == ["sales/dev.parameters.json"]
        assert plan.resource_name("dev", ResourceKind.RESOURCE_GROUP) == "rg-sales-dev"


class TestResourceKind:
    def test_shared_kinds(self):
        assert ResourceKind.SERVICE_BUS.shared
        assert ResourceKind.API_MANAGEMENT.shared
        assert ResourceKind.LOG_ANALYTICS.shared

    def test_domain_kinds(self):
        assert not ResourceKind.RESOURCE_GROUP.shared
        assert not ResourceKind.KEY_VAULT.shared
        assert not ResourceKind.FUNCTION_APP.shared
