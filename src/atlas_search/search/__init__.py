"""검색 실행 레이어: 파이프라인 조립, 클라이언트, 실행기."""

from .client import DEFAULT_LIMIT, SearchClient
from .executor import MongoPipelineExecutor
from .pipeline import build_search_pipeline
from .protocols import PipelineExecutorProtocol, Stage
from .tap import PipelineTap

__all__ = [
    # 인터페이스 (Protocol)
    "PipelineExecutorProtocol",
    "Stage",
    # 파이프라인
    "build_search_pipeline",
    "SearchClient",
    "DEFAULT_LIMIT",
    # 실행기 구현체
    "MongoPipelineExecutor",
    "PipelineTap",
]
