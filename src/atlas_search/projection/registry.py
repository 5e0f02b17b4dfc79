"""결과 모델 타입별 기본 projection 레지스트리.

명시적인 projection 없이 검색하면 결과 모델 타입에 등록된 기본 projection을
사용합니다. 타입별 조회 결과는 최초 1회만 계산되어 프로세스 수명 동안 캐싱됩니다.

Usage:
    >>> @default_projection(ProjectionSpec.include("title"))
    ... class Movie(SearchModel):
    ...     title: str
    >>>
    >>> resolve_projection(Movie)
    {'title': True}
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional, TypeVar, Union

from .spec import ProjectionSpec

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)

ProjectionFactory = Callable[[], Optional[ProjectionSpec]]
ProjectionDefault = Union[ProjectionSpec, ProjectionFactory]


class ProjectionRegistry:
    """모델 타입 → 기본 projection 매핑.

    resolve()는 insert-if-absent로 캐싱하므로 여러 호출자가 동시에 처음 조회해도
    안전합니다. 같은 타입에 대해 factory가 두 번 호출될 수는 있지만 결과는 동일하며,
    먼저 저장된 값이 계속 사용됩니다.
    """

    def __init__(self):
        self._factories: dict[type, ProjectionFactory] = {}
        self._resolved: dict[type, Optional[ProjectionSpec]] = {}

    def register(self, model_type: type, default: ProjectionDefault) -> None:
        """기본 projection 등록.

        Args:
            model_type: 결과 모델 타입
            default: ProjectionSpec 또는 ProjectionSpec을 반환하는 factory

        Raises:
            ValueError: 이미 등록되었거나 이미 조회(resolve)된 타입인 경우.
        """
        if model_type in self._factories:
            raise ValueError(f"{model_type.__name__}의 기본 projection이 이미 등록되어 있습니다.")
        if model_type in self._resolved:
            raise ValueError(
                f"{model_type.__name__}은(는) 이미 조회되었습니다. 검색 전에 등록하세요."
            )

        factory: ProjectionFactory = default if callable(default) else (lambda: default)
        self._factories.setdefault(model_type, factory)
        logger.debug(f"Default projection registered: {model_type.__name__}")

    def is_registered(self, model_type: type) -> bool:
        return model_type in self._factories

    def resolve(self, model_type: type) -> Optional[ProjectionSpec]:
        """타입의 기본 projection 조회 (캐싱됨). 등록되지 않은 타입은 None."""
        try:
            return self._resolved[model_type]
        except KeyError:
            pass

        factory = self._factories.get(model_type)
        spec = factory() if factory is not None else None
        if spec is not None and not isinstance(spec, ProjectionSpec):
            raise TypeError(
                f"{model_type.__name__}의 기본 projection이 ProjectionSpec이 아닙니다: "
                f"{type(spec).__name__}"
            )

        logger.debug(f"Default projection resolved: {model_type.__name__} -> {spec}")
        return self._resolved.setdefault(model_type, spec)


default_registry = ProjectionRegistry()


def default_projection(
    default: ProjectionDefault,
    *,
    registry: ProjectionRegistry | None = None,
) -> Callable[[T], T]:
    """결과 모델 클래스에 기본 projection을 등록하는 데코레이터."""

    def decorator(model_type: T) -> T:
        (registry if registry is not None else default_registry).register(model_type, default)
        return model_type

    return decorator


def resolve_projection(
    model_type: type,
    projection: ProjectionSpec | None = None,
    registry: ProjectionRegistry | None = None,
) -> dict | None:
    """$project 문서 결정.

    명시적인 projection이 있으면 그것을, 없으면 모델 타입의 기본 projection을
    렌더링합니다. 둘 다 없으면 None.
    """
    if projection is not None:
        return projection.render()

    spec = (registry if registry is not None else default_registry).resolve(model_type)
    return spec.render() if spec is not None else None
