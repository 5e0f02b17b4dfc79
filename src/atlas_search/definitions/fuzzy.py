"""퍼지(fuzzy) 매칭 옵션."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FuzzyOptions:
    """검색어와 비슷한 문자열까지 매칭하기 위한 옵션.

    기본값과 다른 필드만 렌더링됩니다. 모든 필드가 기본값이면 빈 문서가 됩니다.

    Attributes:
        max_edits: 허용할 최대 편집 거리 (1 또는 2)
        prefix_length: 변경 없이 일치해야 하는 앞 글자 수
        max_expansions: 검색어당 생성할 최대 변형 수
    """

    max_edits: int = 2
    prefix_length: int = 0
    max_expansions: int = 50

    def __post_init__(self):
        if self.max_edits not in (1, 2):
            raise ValueError(f"max_edits는 1 또는 2여야 합니다: {self.max_edits}")
        if self.prefix_length < 0:
            raise ValueError(f"prefix_length는 0 이상이어야 합니다: {self.prefix_length}")
        if self.max_expansions <= 0:
            raise ValueError(f"max_expansions는 0보다 커야 합니다: {self.max_expansions}")

    def render(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.max_edits != 2:
            result["maxEdits"] = self.max_edits
        if self.prefix_length != 0:
            result["prefixLength"] = self.prefix_length
        if self.max_expansions != 50:
            result["maxExpansions"] = self.max_expansions
        return result
