"""Lookup of advisory backends by the name used in ``AdvisorConfig.service``.

Backends register themselves with ``@register("name")`` when their module is
imported; ``create_advisory_service`` imports the built-in ones on demand so
callers only need this module::

    service = create_advisory_service(AdvisorConfig(service="mock"))
"""

from __future__ import annotations

from typing import Type

from advisor.base import AdvisoryService
from models.config import AdvisorConfig

_SERVICES: dict[str, Type[AdvisoryService]] = {}


def register(name: str):
    """Class decorator adding an ``AdvisoryService`` backend under *name*."""

    def _add(cls: Type[AdvisoryService]) -> Type[AdvisoryService]:
        if name in _SERVICES:
            raise ValueError(f"Advisory service '{name}' is already registered.")
        _SERVICES[name] = cls
        return cls

    return _add


def available_services() -> list[str]:
    """Names accepted by ``AdvisorConfig.service`` (used for CLI choices)."""
    _load_builtin_services()
    return sorted(_SERVICES)


def create_advisory_service(config: AdvisorConfig) -> AdvisoryService:
    """Build the backend named by ``config.service``.

    Raises ``KeyError`` listing the known names when it is not registered.
    """
    _load_builtin_services()

    service_cls = _SERVICES.get(config.service)
    if service_cls is None:
        known = ", ".join(sorted(_SERVICES)) or "(none)"
        raise KeyError(
            f"Unknown advisory service '{config.service}'. Available: {known}."
        )
    return service_cls(config)


def _load_builtin_services() -> None:
    import advisor.llm_advisor  # noqa: F401
    import advisor.mock  # noqa: F401
