"""Template stamper: turns a ``DomainSpec`` into a ``ScaffoldPlan``.

The stamper is pure.  It resolves resource names through the naming
convention, renders the workflow, host, connection and parameter files for the
domain plus one shared deployment pipeline, and returns them as an ordered
plan.  Nothing touches the filesystem until ``PlanWriter`` materialises the
plan.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from .models import DomainSpec, PlannedFile, ResourceKind, ScaffoldPlan
from .naming import NamingConvention
from .templates import TemplateRenderer


PARAMETERS_SCHEMA = (
    "https://schema.management.azure.com/schemas/2019-04-01/deploymentParameters.json#"
)
CONTENT_VERSION = "1.0.0.0"

# ResourceKind -> ARM parameter name in ``<env>.parameters.json``.
PARAMETER_NAMES: dict[ResourceKind, str] = {
    ResourceKind.RESOURCE_GROUP: "resourceGroupName",
    ResourceKind.KEY_VAULT: "keyVaultName",
    ResourceKind.FUNCTION_APP: "functionAppName",
    ResourceKind.LOGIC_APP: "logicAppName",
    ResourceKind.STORAGE_ACCOUNT: "storageAccountName",
    ResourceKind.APP_INSIGHTS: "appInsightsName",
    ResourceKind.SERVICE_BUS: "serviceBusNamespace",
    ResourceKind.API_MANAGEMENT: "apiManagementName",
    ResourceKind.LOG_ANALYTICS: "logAnalyticsWorkspaceName",
}

PIPELINE_PATH = "pipeline.yaml"


# ---------------------------------------------------------------------------
# Stamper
# ---------------------------------------------------------------------------


class TemplateStamper:
    """Builds the scaffold plan for one integration domain.

    Every call to :meth:`generate` starts from scratch, so a single instance
    can be reused for any number of domains.
    """

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def generate(self, spec: DomainSpec | Mapping[str, Any]) -> ScaffoldPlan:
        """Produce the plan for *spec*.

        Args:
            spec: A validated ``DomainSpec`` or a raw mapping with ``name``,
                ``environments`` and optional ``shared_prefix`` and
                ``workflows`` keys.

        Returns:
            The ordered ``ScaffoldPlan``.

        Raises:
            InvalidSpec: If the spec violates the naming rules, has an empty or
                duplicated environment list, or yields an over-long name.
        """
        if not isinstance(spec, DomainSpec):
            spec = DomainSpec.parse(spec)

        naming = NamingConvention(spec.shared_prefix)
        domain = spec.name
        resources = {env: naming.resolve(domain, env) for env in spec.environments}
        context = self._build_context(spec, resources)

        files: list[PlannedFile] = []
        for workflow in spec.workflows:
            files.append(PlannedFile(
                path=f"{domain}/{workflow}/workflow.json",
                content=self.renderer.render(
                    "domain/workflow.json.j2", {**context, "workflow": workflow}
                ),
            ))
        files.append(PlannedFile(
            path=f"{domain}/host.json",
            content=self.renderer.render("domain/host.json.j2", context),
        ))
        files.append(PlannedFile(
            path=f"{domain}/connections.json",
            content=_dump_json(build_connections()),
        ))
        for env in spec.environments:
            files.append(PlannedFile(
                path=parameters_path(domain, env),
                content=_dump_json(build_parameters(domain, env, resources[env])),
            ))
        files.append(PlannedFile(
            path=PIPELINE_PATH,
            content=self.renderer.render("pipeline.yaml.j2", context),
        ))

        return ScaffoldPlan(
            domain=domain,
            environments=list(spec.environments),
            files=files,
            resources=resources,
        )

    # -- Context building --------------------------------------------------

    def _build_context(
        self, spec: DomainSpec, resources: dict[str, dict[str, str]]
    ) -> dict[str, Any]:
        """Build the Jinja2 template context from the spec."""
        stages: list[dict[str, Any]] = []
        previous = "build"
        for env in spec.environments:
            name = f"deploy_{env.replace('-', '_')}"
            stages.append({
                "name": name,
                "environment": env,
                "depends_on": previous,
                "resources": resources[env],
                "parameters_file": parameters_path(spec.name, env),
            })
            previous = name

        return {
            "domain": spec.name,
            "environments": list(spec.environments),
            "shared_prefix": spec.shared_prefix,
            "workflows": list(spec.workflows),
            "stages": stages,
        }


def generate(spec: DomainSpec | Mapping[str, Any]) -> ScaffoldPlan:
    """Module-level shortcut for ``TemplateStamper().generate(spec)``."""
    return TemplateStamper().generate(spec)


# ---------------------------------------------------------------------------
# File builders
# ---------------------------------------------------------------------------

def parameters_path(domain: str, environment: str) -> str:
    return f"{domain}/{environment}.parameters.json"


def build_parameters(
    domain: str, environment: str, names: dict[str, str]
) -> dict[str, Any]:
    """Return the ARM deployment-parameters document for one environment."""
    parameters: dict[str, Any] = {
        "domain": {"value": domain},
        "environment": {"value": environment},
    }
    for kind, param in PARAMETER_NAMES.items():
        parameters[param] = {"value": names[kind.value]}
    parameters["tags"] = {
        "value": {"domain": domain, "environment": environment},
    }
    return {
        "$schema": PARAMETERS_SCHEMA,
        "contentVersion": CONTENT_VERSION,
        "parameters": parameters,
    }


def build_connections() -> dict[str, Any]:
    """Return the workflow connections document.

    Connection values come from app settings so one file serves every
    environment; the per-environment values live in the parameter files.
    """
    return {
        "serviceProviderConnections": {
            "serviceBus": {
                "displayName": "serviceBus",
                "parameterValues": {
                    "fullyQualifiedNamespace": "@appsetting('serviceBus_fullyQualifiedNamespace')",
                    "authProvider": {"Type": "ManagedServiceIdentity"},
                },
                "parameterSetName": "ManagedServiceIdentity",
                "serviceProvider": {"id": "/serviceProviders/serviceBus"},
            },
            "keyVault": {
                "displayName": "keyVault",
                "parameterValues": {
                    "VaultUri": "@appsetting('keyVault_VaultUri')",
                    "authProvider": {"Type": "ManagedServiceIdentity"},
                },
                "parameterSetName": "ManagedServiceIdentity",
                "serviceProvider": {"id": "/serviceProviders/keyVault"},
            },
        },
        "managedApiConnections": {},
    }


def _dump_json(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
