"""MongoDB 클라이언트 팩토리."""

from __future__ import annotations

import logging

from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from .config import SearchConfig

logger = logging.getLogger(__name__)


def create_mongo_client(cfg: SearchConfig | None = None) -> AsyncMongoClient:
    """비동기 MongoDB 클라이언트 생성.

    Args:
        cfg: 검색 설정. None이면 기본 설정 사용.

    Returns:
        AsyncMongoClient 인스턴스. 실제 연결은 첫 요청 시 이루어집니다.

    Raises:
        ValueError: MONGODB_URI가 설정되지 않은 경우.
    """
    if cfg is None:
        cfg = SearchConfig()

    if not cfg.mongodb_uri:
        raise ValueError("MONGODB_URI 환경변수를 설정하세요.")

    return AsyncMongoClient(cfg.mongodb_uri, serverSelectionTimeoutMS=cfg.timeout_ms)


async def check_connection(client: AsyncMongoClient) -> bool:
    """MongoDB 연결 상태 확인.

    Returns:
        연결 성공 여부.
    """
    try:
        await client.admin.command("ping")
        return True
    except PyMongoError as e:
        logger.warning(f"MongoDB ping 실패: {e}")
        return False
