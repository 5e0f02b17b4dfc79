"""파이프라인 실행기 Protocol(인터페이스) 정의.

이 모듈은 pymongo나 다른 인프라에 의존하지 않습니다.

Protocol은 구조적 서브타이핑(Structural Subtyping)을 지원합니다.
구현체가 이 Protocol을 상속하지 않아도, 시그니처만 맞으면 호환됩니다.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar

from pydantic import BaseModel

TModel = TypeVar("TModel", bound=BaseModel)

Stage = dict[str, Any]


class PipelineExecutorProtocol(Protocol):
    """aggregation pipeline 실행기 인터페이스.

    파이프라인을 원격 저장소에서 실행하고 결과를 result_type으로 디코딩합니다.
    네트워크, 인증, 재시도 등은 모두 구현체의 책임입니다.

    Example:
        >>> class MongoPipelineExecutor:
        ...     async def run_pipeline(self, stages, result_type):
        ...         ...  # collection.aggregate(stages) 위임
        >>>
        >>> class RecordingExecutor:
        ...     async def run_pipeline(self, stages, result_type):
        ...         ...  # 테스트용으로 stages만 기록
    """

    async def run_pipeline(self, stages: list[Stage], result_type: type[TModel]) -> list[TModel]: ...
