"""Atlas Search 인덱스 마이그레이션 모듈.

인프라 설정을 위한 독립적인 모듈입니다.
src/atlas_search와 의존성이 없습니다.

Usage:
    python -m migrations.migrate create
    python -m migrations.migrate status
    python -m migrations.migrate drop --confirm
"""

from .mappings import (
    INDEX_DEFINITIONS,
    listings_search_index,
    movies_search_index,
)
from .migrate import (
    IndexInfo,
    MigrationConfig,
    Migrator,
    create_mongo_client,
)

__all__ = [
    # Definitions
    "movies_search_index",
    "listings_search_index",
    "INDEX_DEFINITIONS",
    # Migration
    "MigrationConfig",
    "Migrator",
    "IndexInfo",
    "create_mongo_client",
]
