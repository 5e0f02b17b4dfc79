"""하이라이트 요청 옵션.

검색 결과에서 매칭된 텍스트 구간을 함께 받아오려면 $search 단계에
``highlight`` 옵션을 추가하고, $project 단계에 ``searchHighlights`` 메타 필드를
포함해야 합니다. 후자는 SearchClient가 자동으로 처리합니다.

Reference:
    https://www.mongodb.com/docs/atlas/atlas-search/highlighting/
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .values import FieldPath

DEFAULT_MAX_CHARACTERS_TO_EXAMINE = 500_000
DEFAULT_MAX_NUM_PASSAGES = 5


@dataclass(frozen=True)
class HighlightOptions:
    """
    Attributes:
        path: 하이라이트를 계산할 필드 경로 (str 또는 str 목록도 허용)
        max_characters_to_examine: 문서당 검사할 최대 문자 수
        max_num_passages: 필드당 반환할 최대 구간 수
    """

    path: FieldPath
    max_characters_to_examine: int = DEFAULT_MAX_CHARACTERS_TO_EXAMINE
    max_num_passages: int = DEFAULT_MAX_NUM_PASSAGES

    def __post_init__(self):
        object.__setattr__(self, "path", FieldPath.of(self.path))
        if self.max_characters_to_examine <= 0:
            raise ValueError(
                f"max_characters_to_examine은 0보다 커야 합니다: {self.max_characters_to_examine}"
            )
        if self.max_num_passages <= 0:
            raise ValueError(f"max_num_passages는 0보다 커야 합니다: {self.max_num_passages}")

    def render(self) -> dict[str, Any]:
        result: dict[str, Any] = {"path": self.path.render()}
        if self.max_characters_to_examine != DEFAULT_MAX_CHARACTERS_TO_EXAMINE:
            result["maxCharactersToExamine"] = self.max_characters_to_examine
        if self.max_num_passages != DEFAULT_MAX_NUM_PASSAGES:
            result["maxNumPassages"] = self.max_num_passages
        return result
