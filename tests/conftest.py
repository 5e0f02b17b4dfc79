from __future__ import annotations

from typing import Any, Optional

import pytest

from atlas_search.models import SearchModel
from atlas_search.projection import ProjectionRegistry


class Movie(SearchModel):
    title: str
    year: Optional[int] = None


class RecordingExecutor:
    """실행하지 않고 받은 파이프라인을 기록한 뒤 준비된 문서를 디코딩."""

    def __init__(self, documents: list[dict[str, Any]] | None = None):
        self.documents = documents or []
        self.calls: list[tuple[list[dict[str, Any]], type]] = []

    async def run_pipeline(self, stages, result_type):
        self.calls.append((stages, result_type))
        return [result_type.model_validate(doc) for doc in self.documents]


@pytest.fixture
def registry() -> ProjectionRegistry:
    return ProjectionRegistry()


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor([{"title": "The Matrix", "year": 1999}])
