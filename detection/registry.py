# =============================================================================
# detection/registry.py - Detection Strategy Registry
# =============================================================================
# Ordered registry of detection strategy classes. Registration order is the
# order strategies run in and the order the combiner sees their results.
#
# Usage:
#   from detection.registry import register_strategy, get_strategies
#
#   @register_strategy
#   class PatternStrategy(DetectionStrategy):
#       name = "pattern"
#       weight = 0.40
#       ...
#
#   for strategy_cls in get_strategies():
#       ...
#
# Registration happens at import time only. After the detection package is
# imported the registry is treated as read-only.
# =============================================================================

from __future__ import annotations

from typing import Type

from detection.base import DetectionStrategy

# Registry: name -> strategy class, in registration order
STRATEGY_REGISTRY: dict[str, Type[DetectionStrategy]] = {}


def register_strategy(cls: Type[DetectionStrategy]) -> Type[DetectionStrategy]:
    """
    Decorator to register a strategy class under its `name`.

    Raises:
        ValueError: If the name is missing or already registered
    """
    if not cls.name:
        raise ValueError(f"Strategy {cls.__name__} has no name")
    if cls.name in STRATEGY_REGISTRY:
        raise ValueError(f"Strategy '{cls.name}' is already registered")

    STRATEGY_REGISTRY[cls.name] = cls
    return cls


def get_strategy(name: str) -> Type[DetectionStrategy] | None:
    """Get a strategy class by name."""
    return STRATEGY_REGISTRY.get(name)


def get_strategies() -> tuple[Type[DetectionStrategy], ...]:
    """All registered strategy classes in run order."""
    return tuple(STRATEGY_REGISTRY.values())


def list_strategies() -> dict[str, float]:
    """Strategy name -> combiner weight."""
    return {name: cls.weight for name, cls in STRATEGY_REGISTRY.items()}
