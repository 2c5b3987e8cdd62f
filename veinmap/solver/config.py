"""Configuration helpers for the direction/distance resolver."""

from __future__ import annotations

import copy

from .model import ResolverConfig

_RESOLVER_CONFIG = ResolverConfig()


def get_resolver_config() -> ResolverConfig:
    return copy.deepcopy(_RESOLVER_CONFIG)


def set_resolver_config(config: ResolverConfig) -> None:
    global _RESOLVER_CONFIG
    _RESOLVER_CONFIG = copy.deepcopy(config)


def reset_resolver_config() -> None:
    set_resolver_config(ResolverConfig())
