from __future__ import annotations

from typing import Dict, List

from jobpulse.providers.base import SourceProvider
from jobpulse.providers.remoteok import RemoteOKProvider
from jobpulse.providers.remotive import RemotiveProvider
from jobpulse.providers.arbeitnow import ArbeitnowProvider
from jobpulse.providers.jobicy import JobicyProvider

# Provider registry, in the fixed order sources appear in responses
REGISTRY: Dict[str, SourceProvider] = {}


def register(provider: SourceProvider) -> None:
    REGISTRY[provider.name] = provider


def get(name: str) -> SourceProvider:
    return REGISTRY[name]


def default_providers() -> List[SourceProvider]:
    return list(REGISTRY.values())


register(RemoteOKProvider())
register(RemotiveProvider())
register(ArbeitnowProvider())
register(JobicyProvider())

__all__ = [
    "REGISTRY",
    "register",
    "get",
    "default_providers",
    "SourceProvider",
    "RemoteOKProvider",
    "RemotiveProvider",
    "ArbeitnowProvider",
    "JobicyProvider",
]
