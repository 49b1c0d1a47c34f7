"""Resource naming conventions for integration domains.

Domain resources follow ``<abbrev>-{domain}-{env}`` (``rg-sales-dev``), with
compute resources using ``{domain}-<abbrev>-{env}`` (``sales-func-dev``).
Platform resources shared by every domain are named from the shared prefix
instead of the domain (``sb-shared-dev``).
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidSpec
from .models import DEFAULT_SHARED_PREFIX, ResourceKind


@dataclass(frozen=True)
class NameTemplate:
    """A format string plus the platform's length limit for the name."""
    pattern: str
    max_length: int
    strip_hyphens: bool = False


# Kind -> template. ``{owner}`` is the domain, or the shared prefix for shared kinds.
NAME_TEMPLATES: dict[ResourceKind, NameTemplate] = {
    ResourceKind.RESOURCE_GROUP: NameTemplate("rg-{owner}-{env}", 90),
    ResourceKind.KEY_VAULT: NameTemplate("kv-{owner}-{env}", 24),
    ResourceKind.FUNCTION_APP: NameTemplate("{owner}-func-{env}", 60),
    ResourceKind.LOGIC_APP: NameTemplate("{owner}-logic-{env}", 60),
    ResourceKind.STORAGE_ACCOUNT: NameTemplate("st{owner}{env}", 24, strip_hyphens=True),
    ResourceKind.APP_INSIGHTS: NameTemplate("appi-{owner}-{env}", 260),
    ResourceKind.SERVICE_BUS: NameTemplate("sb-{owner}-{env}", 50),
    ResourceKind.API_MANAGEMENT: NameTemplate("apim-{owner}-{env}", 50),
    ResourceKind.LOG_ANALYTICS: NameTemplate("log-{owner}-{env}", 63),
}

# Length of the shortest conventional stage name (dev, sit, uat).
SHORT_ENVIRONMENT_LENGTH = 3


def resource_name(
    kind: ResourceKind,
    domain: str,
    environment: str,
    *,
    shared_prefix: str = DEFAULT_SHARED_PREFIX,
) -> str:
    """Return the resource name for *kind* in *domain* / *environment*.

    Raises:
        InvalidSpec: If the resulting name exceeds the platform limit.
    """
    template = NAME_TEMPLATES[kind]
    owner = shared_prefix if kind.shared else domain
    name = _render(template, owner, environment)
    if len(name) > template.max_length:
        # The owner is at fault only if it overflows even with a three-letter stage.
        if len(_render(template, owner, "x" * SHORT_ENVIRONMENT_LENGTH)) > template.max_length:
            field = "shared_prefix" if kind.shared else "name"
        else:
            field = "environments"
        raise InvalidSpec(
            field,
            f"{kind.value} name {name!r} for environment {environment!r} is "
            f"{len(name)} characters, limit is {template.max_length}",
        )
    return name


def _render(template: NameTemplate, owner: str, environment: str) -> str:
    name = template.pattern.format(owner=owner, env=environment)
    if template.strip_hyphens:
        name = name.replace("-", "")
    return name


def resolve_all(
    domain: str,
    environment: str,
    *,
    shared_prefix: str = DEFAULT_SHARED_PREFIX,
) -> dict[str, str]:
    """Resolve every known resource kind for one environment.

    Returns:
        Mapping of ``ResourceKind`` value to resource name, in enum order.
    """
    return {
        kind.value: resource_name(kind, domain, environment, shared_prefix=shared_prefix)
        for kind in ResourceKind
    }


class NamingConvention:
    """Stateless facade over the naming templates."""

    def __init__(self, shared_prefix: str = DEFAULT_SHARED_PREFIX) -> None:
        self.shared_prefix = shared_prefix

    def name(self, kind: ResourceKind, domain: str, environment: str) -> str:
        """Return the name for one resource kind."""
        return resource_name(kind, domain, environment, shared_prefix=self.shared_prefix)

    def resolve(self, domain: str, environment: str) -> dict[str, str]:
        """Return every resource name for one environment."""
        return resolve_all(domain, environment, shared_prefix=self.shared_prefix)

    def resource_group(self, domain: str, environment: str) -> str:
        """Return the resource group name, e.g. ``rg-sales-dev``."""
        return self.name(ResourceKind.RESOURCE_GROUP, domain, environment)

    def key_vault(self, domain: str, environment: str) -> str:
        """Return the key vault name, e.g. ``kv-sales-dev``."""
        return self.name(ResourceKind.KEY_VAULT, domain, environment)

    def function_app(self, domain: str, environment: str) -> str:
        """Return the function app name, e.g. ``sales-func-dev``."""
        return self.name(ResourceKind.FUNCTION_APP, domain, environment)
