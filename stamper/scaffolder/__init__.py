"""Integration scaffolder -- stamps domain folders from naming conventions.

Takes a ``DomainSpec`` (domain name, environments, shared prefix, workflow
names) and produces a ``ScaffoldPlan`` of workflow definitions, per-environment
parameter files, connection definitions and a shared deployment pipeline.

Quick usage::

    from stamper.scaffolder import PlanWriter, generate

    plan = generate({"name": "sales", "environments": ["dev", "prod"]})
    await PlanWriter().write(plan, "/tmp/output")
"""

from stamper.scaffolder.errors import InvalidSpec
from stamper.scaffolder.generator import TemplateStamper, generate
from stamper.scaffolder.models import DomainSpec, PlannedFile, ResourceKind, ScaffoldPlan
from stamper.scaffolder.naming import NamingConvention, resolve_all, resource_name
from stamper.scaffolder.templates import TemplateRenderer
from stamper.scaffolder.writer import PlanWriter

__all__ = [
    "DomainSpec",
    "InvalidSpec",
    "NamingConvention",
    "PlanWriter",
    "PlannedFile",
    "ResourceKind",
    "ScaffoldPlan",
    "TemplateRenderer",
    "TemplateStamper",
    "generate",
    "resolve_all",
    "resource_name",
]
