"""
검색 컴포넌트 팩토리.

설정으로부터 MongoDB 클라이언트, 실행기, 검색 클라이언트를 한 번에 생성합니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic

from pymongo import AsyncMongoClient

from atlas_search.client import create_mongo_client
from atlas_search.config import SearchConfig
from atlas_search.search import (
    MongoPipelineExecutor,
    PipelineExecutorProtocol,
    PipelineTap,
    SearchClient,
)
from atlas_search.search.protocols import TModel


@dataclass
class SearchComponents(Generic[TModel]):
    """검색 관련 컴포넌트 묶음."""

    client: AsyncMongoClient
    executor: PipelineExecutorProtocol
    search: SearchClient[TModel]


def create_search_components(
    model_type: type[TModel],
    config: SearchConfig | None = None,
) -> SearchComponents[TModel]:
    """
    검색 관련 컴포넌트를 생성합니다.

    tap_path가 설정되어 있으면 실행기를 PipelineTap으로 감쌉니다.

    Args:
        model_type: 결과 레코드 타입
        config: 검색 설정 (None이면 기본값 사용)

    Returns:
        SearchComponents (client, executor, search)
    """
    cfg = config or SearchConfig()
    client = create_mongo_client(cfg)
    collection = client[cfg.database][cfg.collection]

    executor: PipelineExecutorProtocol = MongoPipelineExecutor(collection)
    if cfg.tap_path is not None:
        executor = PipelineTap(executor, cfg.tap_path)

    search = SearchClient(executor, model_type, index=cfg.search_index)

    return SearchComponents(client=client, executor=executor, search=search)
