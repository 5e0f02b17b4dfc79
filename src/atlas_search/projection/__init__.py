"""Projection 모델과 기본 projection 레지스트리."""

from .registry import (
    ProjectionDefault,
    ProjectionRegistry,
    default_projection,
    default_registry,
    resolve_projection,
)
from .spec import ProjectionSpec, highlights_meta

__all__ = [
    "ProjectionSpec",
    "highlights_meta",
    "ProjectionRegistry",
    "ProjectionDefault",
    "default_registry",
    "default_projection",
    "resolve_projection",
]
