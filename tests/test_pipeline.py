import pytest

from atlas_search.definitions import AutocompleteClause, CompoundClause, HighlightOptions, TextClause
from atlas_search.search import build_search_pipeline


def test_search_and_limit_only():
    stages = build_search_pipeline(AutocompleteClause(query="the", path="title"), limit=10)
    assert stages == [
        {"$search": {"autocomplete": {"query": "the", "path": "title"}}},
        {"$limit": 10},
    ]


def test_limit_none_omits_stage():
    stages = build_search_pipeline(TextClause("space", "plot"), limit=None)
    assert [next(iter(s)) for s in stages] == ["$search"]


def test_stage_order_with_projection():
    stages = build_search_pipeline(
        TextClause("space", "plot"), projection={"title": True}, limit=5
    )
    assert [next(iter(s)) for s in stages] == ["$search", "$limit", "$project"]


def test_highlight_and_index_in_search_stage():
    stages = build_search_pipeline(
        TextClause("space", "plot"),
        highlight=HighlightOptions("plot", max_num_passages=1),
        index="movies_search",
    )
    search = stages[0]["$search"]
    assert list(search) == ["text", "highlight", "index"]
    assert search["highlight"] == {"path": "plot", "maxNumPassages": 1}
    assert search["index"] == "movies_search"


def test_highlight_forces_search_highlights_into_projection():
    projection = {"title": True}
    stages = build_search_pipeline(
        TextClause("matrix", "title"),
        projection=projection,
        highlight=HighlightOptions("title"),
    )
    assert stages[-1] == {
        "$project": {"title": True, "searchHighlights": {"$meta": "searchHighlights"}}
    }
    # 입력 문서는 수정하지 않음
    assert projection == {"title": True}


def test_highlight_without_projection_adds_no_project_stage():
    stages = build_search_pipeline(
        TextClause("matrix", "title"), highlight=HighlightOptions("title")
    )
    assert all("$project" not in s for s in stages)


def test_existing_search_highlights_is_kept():
    projection = {"searchHighlights": False}
    stages = build_search_pipeline(
        TextClause("matrix", "title"), projection=projection, highlight=HighlightOptions("title")
    )
    assert stages[-1]["$project"] == {"searchHighlights": False}


def test_compound_top_level():
    compound = CompoundClause().must(TextClause("a", "x"))
    stages = build_search_pipeline(compound, limit=None)
    assert stages == [{"$search": {"compound": {"must": [{"text": {"path": "x", "query": "a"}}]}}}]


@pytest.mark.parametrize("limit", [0, -1, 1.5, True, "10"])
def test_invalid_limit(limit):
    with pytest.raises(ValueError):
        build_search_pipeline(TextClause("a", "x"), limit=limit)
