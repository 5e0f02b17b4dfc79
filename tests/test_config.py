from pathlib import Path

import pytest

from atlas_search.client import create_mongo_client
from atlas_search.config import SearchConfig
from atlas_search.factory import create_search_components
from atlas_search.search import MongoPipelineExecutor, PipelineTap

from .conftest import Movie

_ENV_KEYS = [
    "MONGODB_URI",
    "ATLAS_SEARCH_DATABASE",
    "ATLAS_SEARCH_COLLECTION",
    "ATLAS_SEARCH_INDEX",
    "ATLAS_SEARCH_TIMEOUT_MS",
    "ATLAS_SEARCH_TAP_PATH",
]


@pytest.fixture
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    cfg = SearchConfig()
    assert cfg.mongodb_uri == ""
    assert cfg.database == "sample_mflix"
    assert cfg.collection == "movies"
    assert cfg.search_index is None
    assert cfg.timeout_ms == 10000
    assert cfg.tap_path is None


def test_from_env(clean_env):
    clean_env.setenv("MONGODB_URI", "mongodb://localhost:27017")
    clean_env.setenv("ATLAS_SEARCH_DATABASE", "sample_airbnb")
    clean_env.setenv("ATLAS_SEARCH_COLLECTION", "listingsAndReviews")
    clean_env.setenv("ATLAS_SEARCH_INDEX", "listings")
    clean_env.setenv("ATLAS_SEARCH_TIMEOUT_MS", "2500")
    clean_env.setenv("ATLAS_SEARCH_TAP_PATH", "log/pipelines.jsonl")

    cfg = SearchConfig()

    assert cfg.mongodb_uri == "mongodb://localhost:27017"
    assert cfg.database == "sample_airbnb"
    assert cfg.collection == "listingsAndReviews"
    assert cfg.search_index == "listings"
    assert cfg.timeout_ms == 2500
    assert cfg.tap_path == Path("log/pipelines.jsonl")


def test_empty_index_is_none(clean_env):
    clean_env.setenv("ATLAS_SEARCH_INDEX", "")
    assert SearchConfig().search_index is None


def test_client_requires_uri(clean_env):
    with pytest.raises(ValueError):
        create_mongo_client(SearchConfig())


@pytest.mark.asyncio
async def test_create_search_components():
    cfg = SearchConfig(
        mongodb_uri="mongodb://localhost:27017",
        database="sample_mflix",
        collection="movies",
        search_index="movies_search",
        tap_path=None,
    )

    components = create_search_components(Movie, cfg)

    assert isinstance(components.executor, MongoPipelineExecutor)
    assert components.executor.collection.full_name == "sample_mflix.movies"
    assert components.search.index == "movies_search"
    assert components.search.model_type is Movie
    await components.client.close()


@pytest.mark.asyncio
async def test_create_search_components_with_tap(tmp_path):
    cfg = SearchConfig(
        mongodb_uri="mongodb://localhost:27017",
        tap_path=tmp_path / "pipelines.jsonl",
    )

    components = create_search_components(Movie, cfg)

    assert isinstance(components.executor, PipelineTap)
    assert isinstance(components.executor.inner, MongoPipelineExecutor)
    await components.client.close()
