"""geoWithin 검색에 사용하는 도형 타입.

GeoJSON 도형(Point, LineString, Polygon, MultiPolygon)은 ``{"type", "coordinates"}``
형태로 렌더링되고, Box와 Circle은 Atlas Search 전용 문서 형태로 렌더링됩니다.

좌표는 항상 ``[longitude, latitude]`` 순서입니다.

Reference:
    https://www.mongodb.com/docs/manual/reference/geojson/
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Union

from typing_extensions import Self


@dataclass(frozen=True)
class Point:
    """위도/경도로 표현되는 단일 지점."""

    latitude: float
    longitude: float

    type_name = "Point"

    def __post_init__(self):
        if self.latitude is None or self.longitude is None:
            raise ValueError("latitude와 longitude는 None일 수 없습니다.")

    def render_coordinates(self) -> list[float]:
        return [self.longitude, self.latitude]

    def render(self) -> dict[str, Any]:
        return {"type": self.type_name, "coordinates": self.render_coordinates()}


@dataclass(frozen=True)
class LineString:
    """점들의 연결. Polygon의 ring으로만 사용됩니다."""

    points: tuple[Point, ...]

    type_name = "LineString"

    def __post_init__(self):
        object.__setattr__(self, "points", tuple(self.points))

    @classmethod
    def of(cls, *points: Point) -> Self:
        return cls(points)

    @property
    def is_closed(self) -> bool:
        return bool(self.points) and self.points[0] == self.points[-1]

    def render_coordinates(self) -> list[list[float]]:
        return [p.render_coordinates() for p in self.points]

    def render(self) -> dict[str, Any]:
        return {"type": self.type_name, "coordinates": self.render_coordinates()}


@dataclass(frozen=True)
class Polygon:
    """하나 이상의 닫힌 ring으로 이루어진 다각형.

    첫 번째 ring은 외곽선이며, 이후 ring은 외곽선 안쪽의 구멍입니다.
    각 ring은 4개 이상의 점을 가지고, 첫 점과 마지막 점이 같아야 합니다.

    Raises:
        ValueError: ring이 없거나, 점이 부족하거나, 닫혀 있지 않은 경우.
    """

    rings: tuple[LineString, ...]

    type_name = "Polygon"

    def __post_init__(self):
        rings = tuple(self.rings)
        if not rings:
            raise ValueError("최소 1개 이상의 닫힌 ring이 필요합니다.")
        for ring in rings:
            if not isinstance(ring, LineString):
                raise TypeError(f"ring은 LineString이어야 합니다: {type(ring).__name__}")
            if len(ring.points) < 4:
                raise ValueError(
                    f"ring은 최소 4개의 점으로 이루어져야 합니다 (현재 {len(ring.points)}개)."
                )
            if not ring.is_closed:
                raise ValueError("ring이 닫히려면 첫 점과 마지막 점이 같아야 합니다.")
        object.__setattr__(self, "rings", rings)

    @classmethod
    def of(cls, *rings: LineString) -> Self:
        return cls(rings)

    @classmethod
    def from_coordinates(cls, coordinates: Iterable[Iterable[tuple[float, float]]]) -> Self:
        """``(lat, lon)`` 튜플로 이루어진 ring 목록에서 생성."""
        return cls(
            tuple(
                LineString(tuple(Point(lat, lon) for lat, lon in ring)) for ring in coordinates
            )
        )

    def render_coordinates(self) -> list[list[list[float]]]:
        return [r.render_coordinates() for r in self.rings]

    def render(self) -> dict[str, Any]:
        return {"type": self.type_name, "coordinates": self.render_coordinates()}


@dataclass(frozen=True)
class MultiPolygon:
    """여러 Polygon의 묶음."""

    polygons: tuple[Polygon, ...]

    type_name = "MultiPolygon"

    def __post_init__(self):
        polygons = tuple(self.polygons)
        if not polygons:
            raise ValueError("최소 1개 이상의 polygon이 필요합니다.")
        for polygon in polygons:
            if not isinstance(polygon, Polygon):
                raise TypeError(f"polygon은 Polygon이어야 합니다: {type(polygon).__name__}")
        object.__setattr__(self, "polygons", polygons)

    @classmethod
    def of(cls, *polygons: Polygon) -> Self:
        return cls(polygons)

    def render_coordinates(self) -> list[list[list[list[float]]]]:
        return [p.render_coordinates() for p in self.polygons]

    def render(self) -> dict[str, Any]:
        return {"type": self.type_name, "coordinates": self.render_coordinates()}


@dataclass(frozen=True)
class Box:
    """좌하단/우상단 꼭짓점으로 정의되는 사각 영역."""

    bottom_left: Point
    top_right: Point

    def __post_init__(self):
        for name in ("bottom_left", "top_right"):
            corner = getattr(self, name)
            if not isinstance(corner, Point):
                raise TypeError(f"{name}는 Point여야 합니다: {type(corner).__name__}")

    def render(self) -> dict[str, Any]:
        return {
            "bottomLeft": self.bottom_left.render(),
            "topRight": self.top_right.render(),
        }


@dataclass(frozen=True)
class Circle:
    """중심점과 반경(미터)으로 정의되는 원형 영역."""

    center: Point
    radius: float

    def __post_init__(self):
        if not isinstance(self.center, Point):
            raise TypeError(f"center는 Point여야 합니다: {type(self.center).__name__}")
        if self.radius <= 0:
            raise ValueError(f"radius는 0보다 커야 합니다: {self.radius}")

    def render(self) -> dict[str, Any]:
        return {"center": self.center.render(), "radius": self.radius}


# geoWithin이 받을 수 있는 영역 타입
GeoShape = Union[Circle, Box, Polygon, MultiPolygon]
