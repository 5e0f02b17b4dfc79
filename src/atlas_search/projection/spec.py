"""$project 단계 정의."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from typing_extensions import Self

# 다형성 직렬화용 판별 필드. 하위 소비자에게 노출하지 않는다.
TYPE_TAG_FIELD = "_t"


def _meta(name: str) -> dict[str, str]:
    return {"$meta": name}


@dataclass(frozen=True)
class ProjectionSpec:
    """결과 문서에 포함/제외할 필드와 메타 필드 정의.

    렌더링 순서:
        1. included_fields (필드 → bool)
        2. 내부 판별 필드(``_t``) 제거
        3. extra_expressions 덮어쓰기 (구조 필드보다 우선)
        4. searchHighlights / textScore / searchScore 메타 표현식

    Attributes:
        included_fields: 필드별 포함(True)/제외(False) 여부
        search_highlights: ``{"$meta": "searchHighlights"}`` 포함 여부
        text_score: ``{"$meta": "textScore"}`` 포함 여부
        search_score: ``{"$meta": "searchScore"}`` 포함 여부
        extra_expressions: 그대로 덮어쓸 필드 (bool 또는 표현식 문서)

    Example:
        >>> ProjectionSpec.include("name", "address").without_id().with_fields(
        ...     {"address": False}
        ... ).with_expressions({"address.location": True}).render()
        {'name': True, 'address': False, '_id': False, 'address.location': True}
    """

    included_fields: Mapping[str, bool] = field(default_factory=dict)
    search_highlights: bool = False
    text_score: bool = False
    search_score: bool = False
    extra_expressions: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # 레지스트리가 프로세스 수명 동안 캐싱하므로 읽기 전용으로 보관
        object.__setattr__(self, "included_fields", MappingProxyType(dict(self.included_fields)))
        object.__setattr__(
            self, "extra_expressions", MappingProxyType(dict(self.extra_expressions))
        )

    @classmethod
    def include(cls, *fields: str, **flags: bool) -> Self:
        """지정한 필드를 모두 포함하는 projection 생성.

        Args:
            *fields: 포함할 필드명
            **flags: search_highlights, text_score, search_score
        """
        return cls(included_fields={f: True for f in fields}, **flags)

    def with_fields(self, fields: Mapping[str, bool]) -> Self:
        return replace(self, included_fields={**self.included_fields, **fields})

    def with_expressions(self, expressions: Mapping[str, Any]) -> Self:
        return replace(self, extra_expressions={**self.extra_expressions, **expressions})

    def without_id(self) -> Self:
        """``_id``를 제외한 projection."""
        return self.with_expressions({"_id": False})

    def render(self) -> dict[str, Any]:
        result: dict[str, Any] = {name: bool(v) for name, v in self.included_fields.items()}
        result.pop(TYPE_TAG_FIELD, None)

        for name, value in self.extra_expressions.items():
            result[name] = copy.deepcopy(value)

        if self.search_highlights:
            result["searchHighlights"] = _meta("searchHighlights")
        if self.text_score:
            result["textScore"] = _meta("textScore")
        if self.search_score:
            result["searchScore"] = _meta("searchScore")

        return result


def highlights_meta() -> dict[str, str]:
    """``searchHighlights`` 메타 표현식."""
    return _meta("searchHighlights")
