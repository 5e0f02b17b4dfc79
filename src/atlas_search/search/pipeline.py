"""$search aggregation pipeline 조립.

Stage 순서는 항상 고정입니다.

    1. {"$search": ...}
    2. {"$limit": n}          (limit이 있을 때)
    3. {"$project": ...}      (projection 문서가 있을 때)
"""

from __future__ import annotations

import logging
from typing import Any

from ..definitions import HighlightOptions, SearchClause, render_clause
from ..projection import highlights_meta
from .protocols import Stage

logger = logging.getLogger(__name__)


def build_search_pipeline(
    clause: SearchClause,
    *,
    projection: dict[str, Any] | None = None,
    highlight: HighlightOptions | None = None,
    index: str | None = None,
    limit: int | None = 20,
) -> list[Stage]:
    """렌더링된 projection 문서와 절로 파이프라인 생성.

    highlight가 주어졌는데 projection 문서에 searchHighlights가 없으면
    하이라이트 결과를 받을 수 있도록 자동으로 추가합니다.

    Args:
        clause: 최상위 검색 절
        projection: 렌더링된 $project 문서 (None이면 $project 생략)
        highlight: 하이라이트 옵션
        index: 사용할 검색 인덱스명 (None이면 서버 기본값 "default")
        limit: 최대 결과 수 (None이면 $limit 생략)

    Returns:
        stage 문서 리스트

    Raises:
        ValueError: limit이 양의 정수가 아닌 경우.
    """
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0):
        raise ValueError(f"limit은 양의 정수여야 합니다: {limit!r}")

    project_stage = dict(projection) if projection is not None else None
    search_stage = render_clause(clause)

    if highlight is not None:
        search_stage["highlight"] = highlight.render()
        if project_stage is not None and "searchHighlights" not in project_stage:
            project_stage["searchHighlights"] = highlights_meta()

    if index is not None:
        search_stage["index"] = index

    stages: list[Stage] = [{"$search": search_stage}]
    if limit is not None:
        stages.append({"$limit": limit})
    if project_stage is not None:
        stages.append({"$project": project_stage})

    logger.debug(f"Search pipeline built: {[next(iter(s)) for s in stages]}")
    return stages
