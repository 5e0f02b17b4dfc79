"""Atlas Search 데모 스크립트

샘플 데이터셋(sample_mflix.movies, sample_airbnb.listingsAndReviews)에 대해
자동완성 검색과 위치 기반 compound 검색을 실행합니다.

사용법:
    uv run python scripts/search_demo.py autocomplete "matr"
    uv run python scripts/search_demo.py nearby "ocean view" --lat 40.73 --lon -73.99
    uv run python scripts/search_demo.py nearby "ocean view" --lat 40.73 --lon -73.99 --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import replace
from typing import Optional

from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

from atlas_search import (
    AutocompleteClause,
    Circle,
    CompoundClause,
    GeoWithinClause,
    HighlightOptions,
    PhraseClause,
    Point,
    ProjectionSpec,
    SearchClause,
    SearchConfig,
    SearchModel,
    build_search_pipeline,
    check_connection,
    create_search_components,
    default_projection,
    resolve_projection,
)

console = Console()


# =============================================================================
# 결과 모델
# =============================================================================


@default_projection(ProjectionSpec.include("title", "year"))
class Movie(SearchModel):
    title: str
    year: Optional[int] = None


class ListingLocation(BaseModel):
    type: str
    coordinates: list[float]


class ListingAddress(BaseModel):
    street: Optional[str] = None
    location: Optional[ListingLocation] = None


@default_projection(ProjectionSpec.include("name", "description", "address"))
class Listing(SearchModel):
    name: str
    description: Optional[str] = None
    address: Optional[ListingAddress] = None


def _highlight_text(item: SearchModel) -> str:
    if not item.search_highlights:
        return "-"
    return ", ".join(hit for h in item.search_highlights for hit in h.hits) or "-"


# =============================================================================
# 검색
# =============================================================================


async def run_autocomplete(query: str, limit: int, dry_run: bool) -> int:
    config = replace(SearchConfig(), database="sample_mflix", collection="movies")
    clause = AutocompleteClause(query, "title")
    highlight = HighlightOptions("title")

    if dry_run:
        _print_pipeline(Movie, clause, None, highlight, limit, config.search_index)
        return 0

    components = create_search_components(Movie, config)
    try:
        if not await check_connection(components.client):
            console.print("MongoDB에 연결할 수 없습니다. MONGODB_URI를 확인하세요.", style="red")
            return 1
        movies = await components.search.autocomplete(clause, highlight=highlight, limit=limit)
    finally:
        await components.client.close()

    table = Table(title=f"autocomplete: {query!r}")
    table.add_column("Title", style="bold")
    table.add_column("Year", justify="right")
    table.add_column("Hits", style="green")
    for movie in movies:
        table.add_row(movie.title, str(movie.year or "-"), _highlight_text(movie))
    console.print(table)
    return 0


async def run_nearby(
    query: str, latitude: float, longitude: float, distance: float, limit: int, dry_run: bool
) -> int:
    config = replace(SearchConfig(), database="sample_airbnb", collection="listingsAndReviews")
    # 위치 조건은 필수, 설명 문구는 점수에만 반영
    compound = (
        CompoundClause()
        .must(GeoWithinClause(Circle(Point(latitude, longitude), distance), "address.location"))
        .should(PhraseClause(query, "description"))
    )
    projection = (
        ProjectionSpec.include("name", "description")
        .without_id()
        .with_expressions({"address.location": True, "address.street": True})
    )
    highlight = HighlightOptions("description")

    if dry_run:
        _print_pipeline(Listing, compound, projection, highlight, limit, config.search_index)
        return 0

    components = create_search_components(Listing, config)
    try:
        if not await check_connection(components.client):
            console.print("MongoDB에 연결할 수 없습니다. MONGODB_URI를 확인하세요.", style="red")
            return 1
        listings = await components.search.compound(compound, projection, highlight, limit)
    finally:
        await components.client.close()

    table = Table(title=f"nearby: {query!r} ({latitude}, {longitude}) ≤ {distance}m")
    table.add_column("Name", style="bold")
    table.add_column("Street")
    table.add_column("Hits", style="green")
    for listing in listings:
        street = listing.address.street if listing.address else None
        table.add_row(listing.name, street or "-", _highlight_text(listing))
    console.print(table)
    return 0


def _print_pipeline(
    model_type: type[SearchModel],
    clause: SearchClause,
    projection: ProjectionSpec | None,
    highlight: HighlightOptions,
    limit: int,
    index: str | None,
) -> None:
    """DB 연결 없이 실제 실행과 같은 파이프라인을 렌더링해서 출력."""
    stages = build_search_pipeline(
        clause,
        projection=resolve_projection(model_type, projection),
        highlight=highlight,
        index=index,
        limit=limit,
    )
    console.print("\n[Pipeline]", style="bold blue")
    console.print_json(json.dumps(stages, ensure_ascii=False))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Atlas Search 데모")
    parser.add_argument("--limit", type=int, default=10, help="최대 결과 수 (기본: 10)")
    parser.add_argument("--dry-run", action="store_true", help="실행 없이 파이프라인만 출력")
    parser.add_argument("-v", "--verbose", action="store_true", help="DEBUG 로그 출력")
    subparsers = parser.add_subparsers(dest="command", help="명령어")

    autocomplete_parser = subparsers.add_parser("autocomplete", help="영화 제목 자동완성")
    autocomplete_parser.add_argument("query", help="입력 중인 검색어")

    nearby_parser = subparsers.add_parser("nearby", help="위치 기반 숙소 검색")
    nearby_parser.add_argument("query", help="설명에서 찾을 구문")
    nearby_parser.add_argument("--lat", type=float, required=True, help="위도")
    nearby_parser.add_argument("--lon", type=float, required=True, help="경도")
    nearby_parser.add_argument("--distance", type=float, default=1000, help="반경 (미터, 기본: 1000)")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "autocomplete":
        return asyncio.run(run_autocomplete(args.query, args.limit, args.dry_run))
    if args.command == "nearby":
        return asyncio.run(
            run_nearby(args.query, args.lat, args.lon, args.distance, args.limit, args.dry_run)
        )

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
