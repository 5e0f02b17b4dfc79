"""검색 절(clause) 정의와 렌더링.

절은 $search 단계에 들어가는 연산자 문서 하나에 대응합니다.

    - TextClause: 전문 검색 (text)
    - PhraseClause: 순서가 있는 구문 검색 (phrase)
    - AutocompleteClause: 입력 중 자동완성 (autocomplete)
    - GeoWithinClause: 영역 내 지점 검색 (geoWithin)
    - CompoundClause: 위 절들의 불리언 조합 (compound)

모든 절은 ``render_clause()`` 한 곳에서 렌더링됩니다. 리프 절은 항상
path → query → score → 연산자별 필드 순서로 키를 채워 결정적인 결과를 만듭니다.

Usage:
    >>> clause = AutocompleteClause(query="the", path="title")
    >>> render_clause(clause)
    {'autocomplete': {'path': 'title', 'query': 'the'}}
    >>>
    >>> compound = (
    ...     CompoundClause()
    ...     .must(GeoWithinClause(Circle(Point(40.7, -73.9), 500), path="address.location"))
    ...     .should(PhraseClause(query="ocean view", path="description"))
    ... )
    >>> render_clause(compound)["compound"].keys()
    dict_keys(['must', 'should'])
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal, Optional, Union

from typing_extensions import Self

from .fuzzy import FuzzyOptions
from .geo import Box, Circle, GeoShape, MultiPolygon, Polygon
from .score import AutocompleteScoreOptions, ScoreOptions, _ScoreOptionsBase
from .values import FieldPath, PathInput, QueryInput, QueryTerm

TokenOrder = Literal["any", "sequential"]

_TOKEN_ORDERS: tuple[str, ...] = ("any", "sequential")


# =============================================================================
# Text 매칭 모드 (fuzzy와 synonyms는 동시에 쓸 수 없음)
# =============================================================================


@dataclass(frozen=True)
class FuzzyMatching:
    options: FuzzyOptions = field(default_factory=FuzzyOptions)


@dataclass(frozen=True)
class SynonymMatching:
    """인덱스 정의에 등록된 synonym mapping 이름."""

    mapping_name: str

    def __post_init__(self):
        if not isinstance(self.mapping_name, str) or not self.mapping_name:
            raise ValueError("synonym mapping 이름은 빈 문자열일 수 없습니다.")


MatchingMode = Optional[Union[FuzzyMatching, SynonymMatching]]


# =============================================================================
# Leaf clauses
# =============================================================================


def _check_score(score: Any, options_type: type[_ScoreOptionsBase]) -> None:
    """절에서 허용하는 점수 옵션인지 확인."""
    if score is None:
        return
    if not isinstance(score, _ScoreOptionsBase):
        raise TypeError(f"score는 {options_type.__name__}여야 합니다: {type(score).__name__}")
    if score.strategy is not None and not isinstance(score.strategy, options_type.supported):
        raise ValueError(
            f"{type(score.strategy).__name__}는 이 연산자에서 사용할 수 없습니다 "
            f"({options_type.__name__} 참고)."
        )


class _ClauseMixin:
    operator: ClassVar[str]

    def render(self) -> dict[str, Any]:
        return render_clause(self)  # type: ignore[arg-type]


@dataclass(frozen=True)
class TextClause(_ClauseMixin):
    """전문(full-text) 검색.

    인덱스에 설정된 analyzer로 query를 분석해 매칭합니다.
    fuzzy 매칭과 synonyms는 함께 사용할 수 없으므로 matching 하나로 표현합니다.

    Example:
        >>> TextClause.fuzzy("matrx", "title", FuzzyOptions(max_edits=1))
        >>> TextClause.with_synonyms("car", "plot", synonyms="transport_synonyms")

    Reference:
        https://www.mongodb.com/docs/atlas/atlas-search/text/
    """

    query: QueryTerm
    path: FieldPath
    matching: MatchingMode = None
    score: ScoreOptions | None = None

    operator: ClassVar[str] = "text"

    def __post_init__(self):
        object.__setattr__(self, "query", QueryTerm.of(self.query))
        object.__setattr__(self, "path", FieldPath.of(self.path))
        if self.matching is not None and not isinstance(
            self.matching, (FuzzyMatching, SynonymMatching)
        ):
            raise TypeError(f"지원하지 않는 matching 타입입니다: {type(self.matching).__name__}")
        _check_score(self.score, ScoreOptions)

    @classmethod
    def fuzzy(
        cls,
        query: QueryInput,
        path: PathInput,
        fuzzy: FuzzyOptions | None = None,
        score: ScoreOptions | None = None,
    ) -> Self:
        return cls(query, path, FuzzyMatching(fuzzy or FuzzyOptions()), score)

    @classmethod
    def with_synonyms(
        cls,
        query: QueryInput,
        path: PathInput,
        synonyms: str,
        score: ScoreOptions | None = None,
    ) -> Self:
        return cls(query, path, SynonymMatching(synonyms), score)

    @property
    def fuzzy_options(self) -> FuzzyOptions | None:
        return self.matching.options if isinstance(self.matching, FuzzyMatching) else None

    @property
    def synonyms(self) -> str | None:
        return self.matching.mapping_name if isinstance(self.matching, SynonymMatching) else None


@dataclass(frozen=True)
class PhraseClause(_ClauseMixin):
    """순서가 있는 단어열 검색.

    slop은 구문 내 단어 사이에 허용할 거리입니다. 0이면 정확히 같은 위치에
    있어야 매칭됩니다.

    Reference:
        https://www.mongodb.com/docs/atlas/atlas-search/phrase/
    """

    query: QueryTerm
    path: FieldPath
    score: ScoreOptions | None = None
    slop: int = 0

    operator: ClassVar[str] = "phrase"

    def __post_init__(self):
        object.__setattr__(self, "query", QueryTerm.of(self.query))
        object.__setattr__(self, "path", FieldPath.of(self.path))
        if self.slop < 0:
            raise ValueError(f"slop은 0 이상이어야 합니다: {self.slop}")
        _check_score(self.score, ScoreOptions)


@dataclass(frozen=True)
class AutocompleteClause(_ClauseMixin):
    """자동완성 검색.

    ``"type": "autocomplete"``로 인덱싱된 필드를 대상으로 합니다.

    Attributes:
        token_order: "any"면 토큰 순서 무관 (순서가 맞으면 점수가 높음),
            "sequential"이면 query 순서대로 인접한 경우만 매칭

    Reference:
        https://www.mongodb.com/docs/atlas/atlas-search/autocomplete/
    """

    query: QueryTerm
    path: FieldPath
    token_order: TokenOrder = "any"
    fuzzy: FuzzyOptions | None = None
    score: AutocompleteScoreOptions | None = None

    operator: ClassVar[str] = "autocomplete"

    def __post_init__(self):
        object.__setattr__(self, "query", QueryTerm.of(self.query))
        object.__setattr__(self, "path", FieldPath.of(self.path))
        if self.token_order not in _TOKEN_ORDERS:
            raise ValueError(f"지원하지 않는 token_order입니다: {self.token_order}")
        _check_score(self.score, AutocompleteScoreOptions)


@dataclass(frozen=True)
class GeoWithinClause(_ClauseMixin):
    """주어진 영역 안에 있는 지점 검색.

    영역 타입에 따라 렌더링 키가 달라집니다.

        - Circle → ``circle``
        - Box → ``box``
        - Polygon, MultiPolygon → ``geometry``

    Reference:
        https://www.mongodb.com/docs/atlas/atlas-search/geoWithin/
    """

    geometry: GeoShape
    path: FieldPath
    score: ScoreOptions | None = None

    operator: ClassVar[str] = "geoWithin"

    def __post_init__(self):
        if not isinstance(self.geometry, (Circle, Box, Polygon, MultiPolygon)):
            raise TypeError(
                "geometry는 Circle, Box, Polygon, MultiPolygon 중 하나여야 합니다: "
                f"{type(self.geometry).__name__}"
            )
        object.__setattr__(self, "path", FieldPath.of(self.path))
        _check_score(self.score, ScoreOptions)

    @property
    def geometry_key(self) -> str:
        if isinstance(self.geometry, Circle):
            return "circle"
        if isinstance(self.geometry, Box):
            return "box"
        return "geometry"


# =============================================================================
# Compound
# =============================================================================


class CompoundClause:
    """must / mustNot / should / filter 절을 조합하는 불리언 빌더.

    추가된 절은 즉시 렌더링되어 순서대로 보관되며, render()에서 한 번에 출력됩니다.
    CompoundClause끼리 중첩할 수 있습니다.

        - must: 모두 매칭되어야 함 (AND), 점수에 반영
        - mustNot: 매칭되면 제외 (AND NOT), 점수 미반영
        - should: 매칭되면 점수 가산 (OR)
        - filter: 모두 매칭되어야 함, 점수 미반영

    Example:
        >>> compound = (
        ...     CompoundClause(minimum_should_match=1)
        ...     .must(TextClause("space", "plot"))
        ...     .should(PhraseClause("star wars", "title"), PhraseClause("star trek", "title"))
        ... )

    Reference:
        https://www.mongodb.com/docs/atlas/atlas-search/compound/
    """

    operator: ClassVar[str] = "compound"

    def __init__(self, *, minimum_should_match: int = 0):
        self._must: list[dict[str, Any]] = []
        self._must_not: list[dict[str, Any]] = []
        self._should: list[dict[str, Any]] = []
        self._filter: list[dict[str, Any]] = []
        self._minimum_should_match = 0
        self.minimum_should_match(minimum_should_match)

    def must(self, *clauses: SearchClause) -> Self:
        self._must.extend(render_clause(c) for c in clauses)
        return self

    def must_not(self, *clauses: SearchClause) -> Self:
        self._must_not.extend(render_clause(c) for c in clauses)
        return self

    def should(self, *clauses: SearchClause) -> Self:
        self._should.extend(render_clause(c) for c in clauses)
        return self

    def filter(self, *clauses: SearchClause) -> Self:
        self._filter.extend(render_clause(c) for c in clauses)
        return self

    def minimum_should_match(self, count: int) -> Self:
        """should 절 중 최소 몇 개가 매칭되어야 하는지 지정."""
        if count < 0:
            raise ValueError(f"minimum_should_match는 0 이상이어야 합니다: {count}")
        self._minimum_should_match = count
        return self

    @property
    def is_empty(self) -> bool:
        return not (self._must or self._must_not or self._should or self._filter)

    def render(self) -> dict[str, Any]:
        document: dict[str, Any] = {}
        if self._must:
            document["must"] = copy.deepcopy(self._must)
        if self._must_not:
            document["mustNot"] = copy.deepcopy(self._must_not)
        if self._should:
            document["should"] = copy.deepcopy(self._should)
        if self._filter:
            document["filter"] = copy.deepcopy(self._filter)
        if self._minimum_should_match > 0:
            document["minimumShouldMatch"] = self._minimum_should_match
        return {self.operator: document}

    def __repr__(self) -> str:
        return (
            f"CompoundClause(must={len(self._must)}, mustNot={len(self._must_not)}, "
            f"should={len(self._should)}, filter={len(self._filter)}, "
            f"minimumShouldMatch={self._minimum_should_match})"
        )


LeafClause = Union[TextClause, PhraseClause, AutocompleteClause, GeoWithinClause]
SearchClause = Union[LeafClause, CompoundClause]


# =============================================================================
# Rendering
# =============================================================================


def render_clause(clause: SearchClause) -> dict[str, Any]:
    """절을 ``{operator: {...}}`` 형태의 문서로 렌더링.

    Raises:
        TypeError: 알 수 없는 절 타입인 경우.
        RuntimeError: 점수 옵션이 비어 있는 등 잘못 생성된 객체인 경우.
    """
    if isinstance(clause, CompoundClause):
        return clause.render()
    if not isinstance(clause, (TextClause, PhraseClause, AutocompleteClause, GeoWithinClause)):
        raise TypeError(f"렌더링할 수 없는 절 타입입니다: {type(clause).__name__}")

    body: dict[str, Any] = {"path": clause.path.render()}
    if not isinstance(clause, GeoWithinClause):
        body["query"] = clause.query.render()
    if clause.score is not None:
        body["score"] = clause.score.render()

    _populate_operator_fields(clause, body)
    return {clause.operator: body}


def _populate_operator_fields(clause: LeafClause, body: dict[str, Any]) -> None:
    """연산자별 필드를 공통 필드 뒤에 추가."""
    if isinstance(clause, TextClause):
        if isinstance(clause.matching, FuzzyMatching):
            body["fuzzy"] = clause.matching.options.render()
        elif isinstance(clause.matching, SynonymMatching):
            body["synonyms"] = clause.matching.mapping_name
    elif isinstance(clause, PhraseClause):
        if clause.slop != 0:
            body["slop"] = clause.slop
    elif isinstance(clause, AutocompleteClause):
        if clause.token_order != "any":
            body["tokenOrder"] = clause.token_order
        if clause.fuzzy is not None:
            body["fuzzy"] = clause.fuzzy.render()
    elif isinstance(clause, GeoWithinClause):
        body[clause.geometry_key] = clause.geometry.render()
