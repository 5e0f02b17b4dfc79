"""Atlas Search 인덱스 정의.

이 모듈은 src/atlas_search와 독립적으로 검색 인덱스 스키마만 정의합니다.
인프라 설정 목적이므로 비즈니스 로직 의존성이 없습니다.

Reference:
    https://www.mongodb.com/docs/atlas/atlas-search/define-field-mappings/
"""

from __future__ import annotations

from typing import Any


def _autocomplete_field(min_grams: int = 2, max_grams: int = 15) -> dict[str, Any]:
    """autocomplete 필드 매핑.

    Note:
        edgeGram 토큰화는 단어 앞부분부터 매칭하므로 입력 중 검색에 적합합니다.
    """
    return {
        "type": "autocomplete",
        "tokenization": "edgeGram",
        "minGrams": min_grams,
        "maxGrams": max_grams,
        "foldDiacritics": True,
    }


def movies_search_index() -> dict[str, Any]:
    """영화(sample_mflix.movies) 검색 인덱스.

    Fields:
        - title: 자동완성 + 전문 검색 (autocomplete, string)
        - plot: 전문 검색 (string)
    """
    return {
        "mappings": {
            "dynamic": False,
            "fields": {
                "title": [_autocomplete_field(), {"type": "string"}],
                "plot": {"type": "string"},
            },
        }
    }


def listings_search_index() -> dict[str, Any]:
    """숙소(sample_airbnb.listingsAndReviews) 검색 인덱스.

    Fields:
        - name: 전문 검색 (string)
        - description: 전문/구문 검색, 하이라이트 (string)
        - address.street: 전문 검색 (string)
        - address.location: 위치 검색 (geo)
    """
    return {
        "mappings": {
            "dynamic": False,
            "fields": {
                "name": {"type": "string"},
                "description": {"type": "string"},
                "address": {
                    "type": "document",
                    "fields": {
                        "street": {"type": "string"},
                        "location": {"type": "geo"},
                    },
                },
            },
        }
    }


INDEX_DEFINITIONS = {
    "movies": movies_search_index,
    "listings": listings_search_index,
}

__all__ = [
    "movies_search_index",
    "listings_search_index",
    "INDEX_DEFINITIONS",
]
