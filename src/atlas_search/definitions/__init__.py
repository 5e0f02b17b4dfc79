"""검색 정의 모델.

이 모듈은 인프라(pymongo 등)에 의존하지 않습니다.
순수한 값 객체와 렌더링 함수만 제공합니다.
"""

from .clauses import (
    AutocompleteClause,
    CompoundClause,
    FuzzyMatching,
    GeoWithinClause,
    LeafClause,
    MatchingMode,
    PhraseClause,
    SearchClause,
    SynonymMatching,
    TextClause,
    TokenOrder,
    render_clause,
)
from .fuzzy import FuzzyOptions
from .geo import Box, Circle, GeoShape, LineString, MultiPolygon, Point, Polygon
from .highlight import HighlightOptions
from .score import (
    AutocompleteScoreOptions,
    BoostScore,
    ConstantScore,
    EmbeddedAggregate,
    EmbeddedScore,
    EmbeddedScoreOptions,
    FunctionScore,
    ScoreOptions,
    ScoreStrategy,
)
from .values import FieldPath, QueryTerm

__all__ = [
    # Values
    "QueryTerm",
    "FieldPath",
    # Geo
    "Point",
    "LineString",
    "Polygon",
    "MultiPolygon",
    "Box",
    "Circle",
    "GeoShape",
    # Options
    "FuzzyOptions",
    "HighlightOptions",
    "ScoreOptions",
    "AutocompleteScoreOptions",
    "EmbeddedScoreOptions",
    "ScoreStrategy",
    "BoostScore",
    "ConstantScore",
    "FunctionScore",
    "EmbeddedScore",
    "EmbeddedAggregate",
    # Clauses
    "TextClause",
    "PhraseClause",
    "AutocompleteClause",
    "GeoWithinClause",
    "CompoundClause",
    "LeafClause",
    "SearchClause",
    "TokenOrder",
    "MatchingMode",
    "FuzzyMatching",
    "SynonymMatching",
    "render_clause",
]
