"""Atlas Search 설정 관리.

환경변수로 설정을 관리합니다 (.env 파일 지원).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _get_tap_path() -> Path | None:
    """파이프라인 기록 파일 경로. 설정하지 않으면 기록하지 않음."""
    value = os.getenv("ATLAS_SEARCH_TAP_PATH")
    return Path(value) if value else None


@dataclass(frozen=True)
class SearchConfig:
    """MongoDB 연결 및 검색 설정.

    Attributes:
        mongodb_uri: MongoDB 연결 문자열 (예: mongodb+srv://...)
        database: 검색 대상 데이터베이스명
        collection: 검색 대상 컬렉션명
        search_index: Atlas Search 인덱스명 (None이면 서버 기본값 "default")
        timeout_ms: 서버 선택 타임아웃 (밀리초)
        tap_path: 실행되는 파이프라인을 기록할 JSONL 파일 (선택)
    """

    # Connection
    mongodb_uri: str = field(default_factory=lambda: os.getenv("MONGODB_URI", ""))
    timeout_ms: int = field(
        default_factory=lambda: int(os.getenv("ATLAS_SEARCH_TIMEOUT_MS", "10000"))
    )

    # Target
    database: str = field(default_factory=lambda: os.getenv("ATLAS_SEARCH_DATABASE", "sample_mflix"))
    collection: str = field(default_factory=lambda: os.getenv("ATLAS_SEARCH_COLLECTION", "movies"))
    search_index: str | None = field(default_factory=lambda: os.getenv("ATLAS_SEARCH_INDEX") or None)

    # Debug
    tap_path: Path | None = field(default_factory=_get_tap_path)
