"""검색 결과 점수(score) 조정 옵션.

Atlas Search는 절의 점수를 네 가지 방식으로 조정할 수 있습니다.

    - boost: 고정 배수 또는 문서 필드 값으로 점수를 곱함
    - constant: 점수를 고정 값으로 대체
    - function: 표현식으로 점수를 계산
    - embedded: embeddedDocuments 점수의 집계 방식 지정

연산자마다 허용되는 방식이 다르므로 옵션 타입을 구분합니다.

    - AutocompleteScoreOptions: boost, constant
    - ScoreOptions: boost, constant, function
    - EmbeddedScoreOptions: boost, constant, function, embedded

Usage:
    >>> ScoreOptions.boost(3).render()
    {'boost': {'value': 3}}
    >>> ScoreOptions.boost_path("imdb.rating", undefined=1).render()
    {'boost': {'path': 'imdb.rating', 'undefined': 1}}

Reference:
    https://www.mongodb.com/docs/atlas/atlas-search/score/modify-score/
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Literal, Optional, Union

from typing_extensions import Self

from .values import FieldPath, PathInput

EmbeddedAggregate = Literal["sum", "maximum", "minimum", "mean"]

_EMBEDDED_AGGREGATES: tuple[str, ...] = ("sum", "maximum", "minimum", "mean")


@dataclass(frozen=True)
class BoostScore:
    """고정 값(value) 또는 필드 경로(path)로 점수를 곱합니다.

    path를 사용할 때 해당 필드가 없는 문서에는 undefined 값이 사용됩니다.
    """

    value: float | None = None
    path: FieldPath | None = None
    undefined: float = 0

    def __post_init__(self):
        if self.value is not None and self.path is not None:
            raise ValueError("BoostScore에는 value와 path 중 하나만 지정할 수 있습니다.")
        if self.path is not None:
            object.__setattr__(self, "path", FieldPath.of(self.path))

    def render(self) -> dict[str, Any]:
        if self.value is not None:
            return {"value": self.value}
        if self.path is not None:
            result: dict[str, Any] = {"path": self.path.render()}
            if self.undefined != 0:
                result["undefined"] = self.undefined
            return result
        raise RuntimeError("BoostScore에 value 또는 path가 설정되지 않았습니다.")


@dataclass(frozen=True)
class ConstantScore:
    value: float

    def render(self) -> dict[str, Any]:
        return {"value": self.value}


@dataclass(frozen=True)
class FunctionScore:
    """점수 계산 표현식 (Atlas Search function score 문법 그대로)."""

    expression: dict[str, Any]

    def render(self) -> dict[str, Any]:
        return dict(self.expression)


@dataclass(frozen=True)
class EmbeddedScore:
    """embeddedDocuments 하위 문서 점수의 집계 방식."""

    aggregate: EmbeddedAggregate = "sum"
    outer_scope: Optional[ScoreOptions] = None

    def __post_init__(self):
        if self.aggregate not in _EMBEDDED_AGGREGATES:
            raise ValueError(f"지원하지 않는 aggregate입니다: {self.aggregate}")
        # EmbeddedScoreOptions는 중첩할 수 없음
        if self.outer_scope is not None and (
            not isinstance(self.outer_scope, ScoreOptions)
            or isinstance(self.outer_scope, EmbeddedScoreOptions)
        ):
            raise TypeError("outer_scope는 ScoreOptions여야 합니다.")

    def render(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.aggregate != "sum":
            result["aggregate"] = self.aggregate
        if self.outer_scope is not None:
            result["outerScope"] = self.outer_scope.render()
        return result


ScoreStrategy = Union[BoostScore, ConstantScore, FunctionScore, EmbeddedScore]

_STRATEGY_KEYS: dict[type, str] = {
    BoostScore: "boost",
    ConstantScore: "constant",
    FunctionScore: "function",
    EmbeddedScore: "embedded",
}


@dataclass(frozen=True)
class _ScoreOptionsBase:
    """점수 옵션 공통 구현.

    정확히 하나의 strategy만 가집니다. 팩토리 메서드를 사용하면 항상 유효한
    strategy가 설정되며, 직접 생성 시 strategy를 빠뜨리면 render()에서 실패합니다.
    """

    strategy: ScoreStrategy | None = None

    supported: ClassVar[tuple[type, ...]] = ()

    def __post_init__(self):
        if self.strategy is not None and not isinstance(self.strategy, self.supported):
            raise ValueError(
                f"{type(self).__name__}는 {type(self.strategy).__name__}를 지원하지 않습니다."
            )

    @classmethod
    def boost(cls, value: float) -> Self:
        return cls(BoostScore(value=_require(value, "value")))

    @classmethod
    def boost_path(cls, path: PathInput, undefined: float = 0) -> Self:
        return cls(BoostScore(path=FieldPath.of(path), undefined=undefined))

    @classmethod
    def constant(cls, value: float) -> Self:
        return cls(ConstantScore(_require(value, "value")))

    def render(self) -> dict[str, Any]:
        if self.strategy is None:
            raise RuntimeError(f"{type(self).__name__}에 설정된 점수 옵션이 없습니다.")
        key = _STRATEGY_KEYS.get(type(self.strategy))
        if key is None:
            raise RuntimeError(f"알 수 없는 점수 옵션입니다: {type(self.strategy).__name__}")
        return {key: self.strategy.render()}


class AutocompleteScoreOptions(_ScoreOptionsBase):
    """autocomplete 연산자용 점수 옵션 (boost, constant)."""

    supported = (BoostScore, ConstantScore)


class ScoreOptions(_ScoreOptionsBase):
    """text, phrase, geoWithin 연산자용 점수 옵션 (boost, constant, function)."""

    supported = (BoostScore, ConstantScore, FunctionScore)

    @classmethod
    def function(cls, expression: dict[str, Any]) -> Self:
        return cls(FunctionScore(_require(expression, "expression")))


class EmbeddedScoreOptions(ScoreOptions):
    """embeddedDocuments 점수 옵션 (boost, constant, function, embedded)."""

    supported = (BoostScore, ConstantScore, FunctionScore, EmbeddedScore)

    @classmethod
    def embedded(
        cls,
        aggregate: EmbeddedAggregate = "sum",
        outer_scope: ScoreOptions | None = None,
    ) -> Self:
        """
        Args:
            aggregate: 하위 문서 점수 집계 방식 (sum, maximum, minimum, mean)
            outer_scope: 집계 후 외부 문서 점수에 적용할 옵션.
                EmbeddedScoreOptions는 중첩할 수 없습니다.

        Raises:
            ValueError: 알 수 없는 aggregate인 경우.
            TypeError: outer_scope가 ScoreOptions가 아닌 경우.
        """
        return cls(EmbeddedScore(aggregate=aggregate, outer_scope=outer_scope))


def _require(value: Any, name: str) -> Any:
    if value is None:
        raise ValueError(f"{name}은(는) None일 수 없습니다.")
    return value
