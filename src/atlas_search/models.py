"""검색 결과 레코드 모델.

executor가 반환한 원본 문서를 pydantic 모델로 디코딩합니다.
결과 모델은 SearchModel을 상속하고, 필요하면 기본 projection을 등록합니다.

Example:
    >>> @default_projection(ProjectionSpec.include("title"))
    ... class Movie(SearchModel):
    ...     title: str
    >>>
    >>> movie = Movie.model_validate({
    ...     "title": "The Matrix",
    ...     "searchHighlights": [
    ...         {"path": "title", "score": 1.2,
    ...          "texts": [{"value": "The ", "type": "text"}, {"value": "Matrix", "type": "hit"}]}
    ...     ],
    ... })
    >>> movie.search_highlights[0].hits
    ['Matrix']
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

HighlightTextType = Literal["hit", "text"]


class HighlightText(BaseModel):
    """하이라이트 구간 하나.

    type이 "hit"이면 매칭된 텍스트, "text"면 주변 텍스트입니다.
    """

    value: str
    type: HighlightTextType


class Highlight(BaseModel):
    """필드 하나에 대한 하이라이트 결과."""

    path: str
    texts: list[HighlightText]
    score: float

    @property
    def hits(self) -> list[str]:
        return [t.value for t in self.texts if t.type == "hit"]


class SearchModel(BaseModel):
    """검색 결과 모델 베이스.

    $project 단계의 메타 필드(searchHighlights, searchScore, textScore)를
    snake_case 속성으로 받습니다. 정의되지 않은 필드는 무시합니다.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    search_highlights: Optional[list[Highlight]] = Field(default=None, alias="searchHighlights")
    search_score: Optional[float] = Field(default=None, alias="searchScore")
    text_score: Optional[float] = Field(default=None, alias="textScore")
