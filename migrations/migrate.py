"""Atlas Search 인덱스 마이그레이션 관리.

이 모듈은 src/atlas_search와 독립적으로 검색 인덱스 DDL 작업을 수행합니다.

Usage:
    python -m migrations.migrate status      # 상태 확인
    python -m migrations.migrate create      # 인덱스 생성
    python -m migrations.migrate drop --confirm       # 삭제
    python -m migrations.migrate recreate --confirm   # 재생성

환경변수:
    MONGODB_URI: MongoDB 연결 문자열 (필수)
    ATLAS_SEARCH_INDEX: 검색 인덱스명 (기본: default)
    MOVIES_DATABASE / MOVIES_COLLECTION: 영화 컬렉션 (기본: sample_mflix.movies)
    LISTINGS_DATABASE / LISTINGS_COLLECTION: 숙소 컬렉션 (기본: sample_airbnb.listingsAndReviews)
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from dataclasses import dataclass
from typing import Any, Literal

from dotenv import load_dotenv
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from pymongo.operations import SearchIndexModel

from .mappings import INDEX_DEFINITIONS

load_dotenv()

IndexTarget = Literal["movies", "listings"]


# =============================================================================
# Config (migrations 전용, 최소한의 설정만)
# =============================================================================


@dataclass(frozen=True)
class MigrationConfig:
    """마이그레이션 전용 설정.

    src/atlas_search/config.py와 독립적입니다.
    """

    mongodb_uri: str
    index_name: str
    movies_database: str
    movies_collection: str
    listings_database: str
    listings_collection: str

    @classmethod
    def from_env(cls) -> MigrationConfig:
        """환경변수에서 설정 로드."""
        return cls(
            mongodb_uri=os.environ["MONGODB_URI"],
            index_name=os.getenv("ATLAS_SEARCH_INDEX", "default"),
            movies_database=os.getenv("MOVIES_DATABASE", "sample_mflix"),
            movies_collection=os.getenv("MOVIES_COLLECTION", "movies"),
            listings_database=os.getenv("LISTINGS_DATABASE", "sample_airbnb"),
            listings_collection=os.getenv("LISTINGS_COLLECTION", "listingsAndReviews"),
        )


def create_mongo_client(cfg: MigrationConfig) -> MongoClient:
    """마이그레이션용 MongoDB 클라이언트 생성."""
    return MongoClient(cfg.mongodb_uri, serverSelectionTimeoutMS=30_000)


# =============================================================================
# Migrator
# =============================================================================


@dataclass
class IndexInfo:
    """검색 인덱스 정보."""

    name: str
    namespace: str
    exists: bool
    status: str = "-"
    queryable: bool = False


class Migrator:
    """Atlas Search 인덱스 마이그레이션 관리자."""

    def __init__(self, client: MongoClient, cfg: MigrationConfig, *, poll_interval_s: float = 2.0):
        self.client = client
        self.cfg = cfg
        self.poll_interval_s = poll_interval_s

    def _collection(self, target: IndexTarget) -> Collection[dict[str, Any]]:
        if target == "movies":
            return self.client[self.cfg.movies_database][self.cfg.movies_collection]
        return self.client[self.cfg.listings_database][self.cfg.listings_collection]

    def _find_index(self, collection: Collection) -> dict[str, Any] | None:
        for index in collection.list_search_indexes(name=self.cfg.index_name):
            return index
        return None

    def get_index_info(self, target: IndexTarget) -> IndexInfo:
        """검색 인덱스 정보 조회."""
        collection = self._collection(target)
        index = self._find_index(collection)
        if index is None:
            return IndexInfo(name=self.cfg.index_name, namespace=collection.full_name, exists=False)

        return IndexInfo(
            name=self.cfg.index_name,
            namespace=collection.full_name,
            exists=True,
            status=index.get("status", "UNKNOWN"),
            queryable=bool(index.get("queryable", False)),
        )

    def status(self) -> dict[str, IndexInfo]:
        """모든 관리 인덱스 상태 조회."""
        return {target: self.get_index_info(target) for target in INDEX_DEFINITIONS}

    def create_index(self, target: IndexTarget, *, skip_existing: bool = True) -> bool:
        """단일 검색 인덱스 생성.

        Atlas는 인덱스를 비동기로 빌드합니다. 생성 직후에는 queryable이 아닐 수 있습니다.
        """
        collection = self._collection(target)
        if self._find_index(collection) is not None:
            if skip_existing:
                return True
            raise ValueError(f"검색 인덱스 '{self.cfg.index_name}'이 이미 존재합니다.")

        definition = INDEX_DEFINITIONS[target]()
        collection.create_search_index(
            SearchIndexModel(definition=definition, name=self.cfg.index_name)
        )
        return True

    def create_all(self, *, skip_existing: bool = True) -> dict[str, bool]:
        """모든 검색 인덱스 생성."""
        return {
            target: self.create_index(target, skip_existing=skip_existing)
            for target in INDEX_DEFINITIONS
        }

    def drop_index(self, target: IndexTarget, *, wait_timeout_s: float = 0) -> bool:
        """단일 검색 인덱스 삭제.

        Args:
            wait_timeout_s: 0보다 크면 인덱스가 사라질 때까지 최대 이 시간만큼 대기
        """
        collection = self._collection(target)
        if self._find_index(collection) is None:
            return True

        collection.drop_search_index(self.cfg.index_name)
        if wait_timeout_s > 0:
            return self._wait_until_dropped(collection, wait_timeout_s)
        return True

    def _wait_until_dropped(self, collection: Collection, timeout_s: float) -> bool:
        """Atlas의 비동기 삭제가 끝날 때까지 polling."""
        deadline = time.monotonic() + timeout_s
        while time.monotonic() < deadline:
            if self._find_index(collection) is None:
                return True
            time.sleep(self.poll_interval_s)
        return self._find_index(collection) is None

    def drop_all(self, *, wait_timeout_s: float = 0) -> dict[str, bool]:
        """모든 검색 인덱스 삭제."""
        return {
            target: self.drop_index(target, wait_timeout_s=wait_timeout_s)
            for target in INDEX_DEFINITIONS
        }

    def recreate_all(self, *, wait_timeout_s: float = 120) -> dict[str, bool]:
        """모든 검색 인덱스 재생성 (drop + create)."""
        dropped = self.drop_all(wait_timeout_s=wait_timeout_s)
        if not all(dropped.values()):
            return dropped
        return self.create_all(skip_existing=False)


# =============================================================================
# CLI
# =============================================================================


def _print_results(results: dict[str, bool]) -> None:
    for target, ok in results.items():
        print(f"   {'✅' if ok else '❌'} {target}")


def _confirmed(action: str, confirm: bool) -> bool:
    if confirm:
        return True
    print(f"\n⚠️  {action}하려면 --confirm 플래그가 필요합니다.")
    print("   인덱스가 다시 빌드될 때까지 해당 컬렉션의 $search 쿼리가 실패합니다!")
    return False


def cmd_status(migrator: Migrator) -> int:
    """관리 대상 검색 인덱스 상태 출력."""
    print(f"\n📊 Atlas Search index '{migrator.cfg.index_name}'")
    print("=" * 50)

    for target, info in migrator.status().items():
        if not info.exists:
            print(f"\n❌ {target}: {info.namespace} (없음)")
            continue
        ready = "🟢" if info.queryable else "🟡"
        print(f"\n✅ {target}: {info.namespace}")
        print(f"   {ready} {info.status} (queryable={info.queryable})")

    print()
    return 0


def cmd_create(migrator: Migrator) -> int:
    """없는 인덱스만 생성."""
    print("\n🔧 Creating search indexes...")
    results = migrator.create_all(skip_existing=True)
    _print_results(results)
    print("\n✨ 요청 완료. status로 READY 여부를 확인하세요.")
    return 0 if all(results.values()) else 1


def cmd_drop(migrator: Migrator, confirm: bool, wait_timeout_s: float) -> int:
    """인덱스 삭제."""
    if not _confirmed("삭제", confirm):
        return 1

    print("\n🗑️  Dropping search indexes...")
    results = migrator.drop_all(wait_timeout_s=wait_timeout_s)
    _print_results(results)
    return 0 if all(results.values()) else 1


def cmd_recreate(migrator: Migrator, confirm: bool, wait_timeout_s: float) -> int:
    """인덱스 삭제 후 현재 정의로 다시 생성."""
    if not _confirmed("재생성", confirm):
        return 1

    print("\n♻️  Recreating search indexes...")
    results = migrator.recreate_all(wait_timeout_s=wait_timeout_s)
    _print_results(results)
    if not all(results.values()):
        print(f"\n❌ {wait_timeout_s:g}초 안에 삭제가 끝나지 않았습니다. 잠시 후 create를 실행하세요.")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI 진입점."""
    parser = argparse.ArgumentParser(
        prog="python -m migrations.migrate",
        description="Atlas Search 인덱스 마이그레이션 도구",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
환경변수:
  MONGODB_URI           MongoDB 연결 문자열 (필수)
  ATLAS_SEARCH_INDEX    검색 인덱스명 (기본: default)
  MOVIES_DATABASE       영화 DB (기본: sample_mflix)
  MOVIES_COLLECTION     영화 컬렉션 (기본: movies)
  LISTINGS_DATABASE     숙소 DB (기본: sample_airbnb)
  LISTINGS_COLLECTION   숙소 컬렉션 (기본: listingsAndReviews)
""",
    )
    commands = parser.add_subparsers(dest="command", help="명령어")
    commands.add_parser("status", help="인덱스 상태 확인")
    commands.add_parser("create", help="없는 인덱스 생성")
    for name, help_text in (("drop", "인덱스 삭제"), ("recreate", "인덱스 재생성")):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("--confirm", action="store_true", help="실행 확인 (필수)")
        sub.add_argument(
            "--wait",
            type=float,
            default=120 if name == "recreate" else 0,
            help="삭제 완료까지 대기할 최대 시간(초)",
        )

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 1

    cfg = MigrationConfig.from_env()
    client = create_mongo_client(cfg)
    try:
        client.admin.command("ping")
    except PyMongoError as e:
        print(f"\n❌ MongoDB 연결 오류: {e}")
        return 1
    print(f"\n🔗 Connected to: {client.address}")

    migrator = Migrator(client, cfg)
    if args.command == "status":
        return cmd_status(migrator)
    if args.command == "create":
        return cmd_create(migrator)
    if args.command == "drop":
        return cmd_drop(migrator, args.confirm, args.wait)
    return cmd_recreate(migrator, args.confirm, args.wait)


if __name__ == "__main__":
    sys.exit(main())
