"""검색 쿼리와 필드 경로를 표현하는 값 타입.

단일 문자열 또는 문자열 목록을 모두 받을 수 있으며,
렌더링 시 문자열 혹은 문자열 배열로 변환됩니다.

이 모듈은 인프라에 의존하지 않습니다.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from typing_extensions import Self


def _coerce_terms(value: object, name: str) -> str | tuple[str, ...]:
    """str 또는 str 시퀀스를 저장용 형태로 정규화."""
    if value is None:
        raise ValueError(f"{name}은(는) None일 수 없습니다.")
    if isinstance(value, str):
        return value
    if not isinstance(value, Sequence):
        raise TypeError(f"{name}은(는) str 또는 str 시퀀스여야 합니다: {type(value).__name__}")

    terms = tuple(value)
    if not terms:
        raise ValueError(f"{name}에는 최소 1개 이상의 값이 필요합니다.")
    for t in terms:
        if not isinstance(t, str):
            raise TypeError(f"{name}의 모든 원소는 str이어야 합니다: {t!r}")
    return terms


@dataclass(frozen=True)
class _StringOrList:
    value: str | tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "value", _coerce_terms(self.value, type(self).__name__))

    @classmethod
    def single(cls, value: str) -> Self:
        if not isinstance(value, str):
            raise TypeError(f"str이 필요합니다: {type(value).__name__}")
        return cls(value)

    @classmethod
    def many(cls, values: Sequence[str]) -> Self:
        if isinstance(values, str):
            raise TypeError("many()에는 str 시퀀스를 전달하세요. 단일 값은 single()을 사용합니다.")
        return cls(values)

    @classmethod
    def of(cls, value: str | Sequence[str] | Self) -> Self:
        """문자열, 문자열 시퀀스, 또는 같은 타입의 인스턴스로부터 생성."""
        if isinstance(value, cls):
            return value
        return cls(value)

    @property
    def is_multi(self) -> bool:
        return isinstance(self.value, tuple)

    def render(self) -> str | list[str]:
        if isinstance(self.value, tuple):
            return list(self.value)
        return self.value


class QueryTerm(_StringOrList):
    """검색어 하나 또는 여러 개.

    하나의 문자열에 여러 단어가 있으면 Atlas Search는 각 단어도 개별적으로 매칭합니다.

    Example:
        >>> QueryTerm.of("matrix").render()
        'matrix'
        >>> QueryTerm.of(["matrix", "reloaded"]).render()
        ['matrix', 'reloaded']
    """


class FieldPath(_StringOrList):
    """검색 대상 필드 경로 하나 또는 여러 개.

    여러 경로가 주어지면 그 중 하나라도 매칭되는 문서가 결과에 포함됩니다.
    """


QueryInput = Union[str, Sequence[str], QueryTerm]
PathInput = Union[str, Sequence[str], FieldPath]
