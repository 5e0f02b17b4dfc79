"""Atlas Search 클라이언트.

검색 절, projection, 하이라이트 옵션을 aggregation pipeline으로 조립해
executor에 위임합니다. 렌더링은 순수 함수이며, executor 호출이 유일한 I/O입니다.
"""

from __future__ import annotations

import logging
from typing import Generic

from ..definitions import (
    AutocompleteClause,
    CompoundClause,
    GeoWithinClause,
    HighlightOptions,
    PhraseClause,
    SearchClause,
    TextClause,
)
from ..projection import ProjectionRegistry, ProjectionSpec, default_registry, resolve_projection
from .pipeline import build_search_pipeline
from .protocols import PipelineExecutorProtocol, Stage, TModel

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20


class SearchClient(Generic[TModel]):
    """하나의 컬렉션(결과 모델 타입)에 대한 검색 클라이언트.

    Args:
        executor: 파이프라인 실행기
        model_type: 결과 레코드 타입 (기본 projection 조회 키로도 사용)
        index: 검색 인덱스명. None이면 $search에 index를 넣지 않습니다.
        registry: 기본 projection 레지스트리

    Example:
        >>> client = SearchClient(executor, Movie)
        >>> movies = await client.autocomplete(
        ...     AutocompleteClause("matr", "title"),
        ...     highlight=HighlightOptions("title"),
        ...     limit=10,
        ... )
    """

    def __init__(
        self,
        executor: PipelineExecutorProtocol,
        model_type: type[TModel],
        *,
        index: str | None = None,
        registry: ProjectionRegistry | None = None,
    ):
        self.executor = executor
        self.model_type = model_type
        self.index = index
        self.registry = registry if registry is not None else default_registry

    def build_pipeline(
        self,
        clause: SearchClause,
        projection: ProjectionSpec | None = None,
        highlight: HighlightOptions | None = None,
        limit: int | None = DEFAULT_LIMIT,
    ) -> list[Stage]:
        """실행 없이 파이프라인만 생성."""
        projection_doc = resolve_projection(self.model_type, projection, self.registry)
        return build_search_pipeline(
            clause,
            projection=projection_doc,
            highlight=highlight,
            index=self.index,
            limit=limit,
        )

    async def execute(
        self,
        clause: SearchClause,
        projection: ProjectionSpec | None = None,
        highlight: HighlightOptions | None = None,
        limit: int | None = DEFAULT_LIMIT,
    ) -> list[TModel]:
        """검색 실행.

        Args:
            clause: 최상위 검색 절 (리프 또는 compound)
            projection: 반환 필드 정의. None이면 모델 기본 projection 사용
            highlight: 하이라이트 옵션
            limit: 최대 결과 수 (None이면 제한 없음)

        Returns:
            executor가 디코딩한 결과 리스트

        Raises:
            executor에서 발생한 예외는 그대로 전파됩니다.
        """
        stages = self.build_pipeline(clause, projection, highlight, limit)
        logger.info(
            f"Atlas Search 실행: model={self.model_type.__name__}, "
            f"operator={clause.operator}, stages={len(stages)}"
        )
        return await self.executor.run_pipeline(stages, self.model_type)

    # =========================================================================
    # 연산자별 단축 메서드
    # =========================================================================

    async def autocomplete(
        self,
        autocomplete: AutocompleteClause,
        projection: ProjectionSpec | None = None,
        highlight: HighlightOptions | None = None,
        limit: int | None = DEFAULT_LIMIT,
    ) -> list[TModel]:
        return await self.execute(autocomplete, projection, highlight, limit)

    async def compound(
        self,
        compound: CompoundClause,
        projection: ProjectionSpec | None = None,
        highlight: HighlightOptions | None = None,
        limit: int | None = DEFAULT_LIMIT,
    ) -> list[TModel]:
        return await self.execute(compound, projection, highlight, limit)

    async def text(
        self,
        text: TextClause,
        projection: ProjectionSpec | None = None,
        highlight: HighlightOptions | None = None,
        limit: int | None = DEFAULT_LIMIT,
    ) -> list[TModel]:
        return await self.execute(text, projection, highlight, limit)

    async def phrase(
        self,
        phrase: PhraseClause,
        projection: ProjectionSpec | None = None,
        highlight: HighlightOptions | None = None,
        limit: int | None = DEFAULT_LIMIT,
    ) -> list[TModel]:
        return await self.execute(phrase, projection, highlight, limit)

    async def geo_within(
        self,
        geo_within: GeoWithinClause,
        projection: ProjectionSpec | None = None,
        highlight: HighlightOptions | None = None,
        limit: int | None = DEFAULT_LIMIT,
    ) -> list[TModel]:
        return await self.execute(geo_within, projection, highlight, limit)
