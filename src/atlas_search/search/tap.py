"""파이프라인 JSON Line 로거 (tap pattern).

실행기를 감싸서 전송되는 파이프라인을 파일에 기록하고, 결과는 그대로 통과시킵니다.
기록 실패는 검색을 막지 않고 warning log만 남깁니다.

Example:
    >>> executor = PipelineTap(MongoPipelineExecutor(collection), "log/pipelines.jsonl")
    >>> client = SearchClient(executor, Movie)
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from .protocols import PipelineExecutorProtocol, Stage, TModel

logger = logging.getLogger(__name__)


class PipelineTap:
    """PipelineExecutorProtocol 구현체를 감싸는 기록용 래퍼."""

    def __init__(self, inner: PipelineExecutorProtocol, path: str | Path):
        self.inner = inner
        self.path = Path(path)

    def _write(self, record: dict) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Failed to log pipeline to {self.path}: {e}")

    async def run_pipeline(self, stages: list[Stage], result_type: type[TModel]) -> list[TModel]:
        # 실행 전에 기록해서 실패한 파이프라인도 남긴다
        self._write(
            {
                "logged_at": datetime.now(timezone.utc).isoformat(),
                "result_type": result_type.__name__,
                "stages": stages,
            }
        )
        return await self.inner.run_pipeline(stages, result_type)
