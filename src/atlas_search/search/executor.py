"""pymongo 기반 파이프라인 실행기.

PipelineExecutorProtocol 구현체. 재시도나 에러 변환 없이 pymongo와 pydantic의
예외를 그대로 전파합니다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .protocols import Stage, TModel

if TYPE_CHECKING:
    from pymongo.asynchronous.collection import AsyncCollection

logger = logging.getLogger(__name__)


class MongoPipelineExecutor:
    """AsyncCollection.aggregate()로 파이프라인을 실행하고 결과를 디코딩."""

    def __init__(self, collection: AsyncCollection[dict[str, Any]]):
        self.collection = collection

    async def run_pipeline(self, stages: list[Stage], result_type: type[TModel]) -> list[TModel]:
        cursor = await self.collection.aggregate(stages)
        documents = await cursor.to_list(length=None)
        logger.debug(
            f"Pipeline executed on {self.collection.full_name}: {len(documents)} documents"
        )
        return [result_type.model_validate(doc) for doc in documents]
