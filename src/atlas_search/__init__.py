"""Atlas Search 쿼리 정의 모델과 aggregation pipeline 렌더러.

검색 절(text, phrase, autocomplete, geoWithin, compound)을 조합하고
$search → $limit → $project 파이프라인으로 렌더링합니다.

주요 컴포넌트:
    - definitions: 검색 절, 점수/퍼지/하이라이트 옵션, 도형 (순수 값 객체)
    - projection: $project 정의와 모델별 기본 projection 레지스트리
    - models: 검색 결과 레코드 베이스 (pydantic)
    - search: 파이프라인 조립, SearchClient, pymongo 실행기

Usage:
    >>> from atlas_search import (
    ...     AutocompleteClause, HighlightOptions, ProjectionSpec,
    ...     SearchModel, create_search_components, default_projection,
    ... )
    >>>
    >>> @default_projection(ProjectionSpec.include("title"))
    ... class Movie(SearchModel):
    ...     title: str
    >>>
    >>> components = create_search_components(Movie)
    >>> movies = await components.search.autocomplete(
    ...     AutocompleteClause("matr", "title"),
    ...     highlight=HighlightOptions("title"),
    ...     limit=10,
    ... )
"""

from atlas_search.client import check_connection, create_mongo_client
from atlas_search.config import SearchConfig
from atlas_search.definitions import (
    AutocompleteClause,
    AutocompleteScoreOptions,
    Box,
    Circle,
    CompoundClause,
    EmbeddedScoreOptions,
    FieldPath,
    FuzzyOptions,
    GeoWithinClause,
    HighlightOptions,
    LineString,
    MultiPolygon,
    PhraseClause,
    Point,
    Polygon,
    QueryTerm,
    ScoreOptions,
    SearchClause,
    TextClause,
    render_clause,
)
from atlas_search.factory import SearchComponents, create_search_components
from atlas_search.models import Highlight, HighlightText, SearchModel
from atlas_search.projection import (
    ProjectionRegistry,
    ProjectionSpec,
    default_projection,
    resolve_projection,
)
from atlas_search.search import (
    MongoPipelineExecutor,
    PipelineExecutorProtocol,
    PipelineTap,
    SearchClient,
    build_search_pipeline,
)

__all__ = [
    # Config
    "SearchConfig",
    # Client
    "create_mongo_client",
    "check_connection",
    # Values / Geo
    "QueryTerm",
    "FieldPath",
    "Point",
    "LineString",
    "Polygon",
    "MultiPolygon",
    "Box",
    "Circle",
    # Options
    "FuzzyOptions",
    "HighlightOptions",
    "ScoreOptions",
    "AutocompleteScoreOptions",
    "EmbeddedScoreOptions",
    # Clauses
    "SearchClause",
    "TextClause",
    "PhraseClause",
    "AutocompleteClause",
    "GeoWithinClause",
    "CompoundClause",
    "render_clause",
    # Projection
    "ProjectionSpec",
    "ProjectionRegistry",
    "default_projection",
    "resolve_projection",
    # Models
    "SearchModel",
    "Highlight",
    "HighlightText",
    # Search
    "PipelineExecutorProtocol",
    "build_search_pipeline",
    "SearchClient",
    "MongoPipelineExecutor",
    "PipelineTap",
    "SearchComponents",
    "create_search_components",
]
