import pytest

from migrations import INDEX_DEFINITIONS, MigrationConfig, Migrator
from migrations.migrate import main


class FakeSearchCollection:
    def __init__(self, full_name, indexes=None):
        self.full_name = full_name
        self.indexes = dict(indexes or {})
        self.created = []
        self.dropped = []

    def list_search_indexes(self, name=None):
        return [idx for n, idx in self.indexes.items() if name is None or n == name]

    def create_search_index(self, model):
        document = model.document
        self.created.append(document)
        self.indexes[document["name"]] = {"name": document["name"], "status": "PENDING"}
        return document["name"]

    def drop_search_index(self, name):
        self.dropped.append(name)
        self.indexes.pop(name, None)


class FakeClient:
    def __init__(self, collections):
        self.collections = collections

    def __getitem__(self, database):
        return {
            coll.full_name.split(".", 1)[1]: coll
            for coll in self.collections
            if coll.full_name.startswith(f"{database}.")
        }


@pytest.fixture
def cfg():
    return MigrationConfig(
        mongodb_uri="mongodb://localhost:27017",
        index_name="default",
        movies_database="sample_mflix",
        movies_collection="movies",
        listings_database="sample_airbnb",
        listings_collection="listingsAndReviews",
    )


@pytest.fixture
def collections():
    return {
        "movies": FakeSearchCollection(
            "sample_mflix.movies",
            {"default": {"name": "default", "status": "READY", "queryable": True}},
        ),
        "listings": FakeSearchCollection("sample_airbnb.listingsAndReviews"),
    }


@pytest.fixture
def migrator(cfg, collections):
    return Migrator(FakeClient(list(collections.values())), cfg, poll_interval_s=0)


def test_index_definitions_cover_demo_fields():
    movies = INDEX_DEFINITIONS["movies"]()["mappings"]["fields"]
    listings = INDEX_DEFINITIONS["listings"]()["mappings"]["fields"]

    assert movies["title"][0]["type"] == "autocomplete"
    assert listings["address"]["fields"]["location"] == {"type": "geo"}


def test_status(migrator):
    status = migrator.status()

    assert status["movies"].exists
    assert status["movies"].status == "READY"
    assert status["movies"].queryable
    assert not status["listings"].exists
    assert status["listings"].namespace == "sample_airbnb.listingsAndReviews"


def test_create_all_skips_existing(migrator, collections):
    results = migrator.create_all()

    assert results == {"movies": True, "listings": True}
    assert collections["movies"].created == []
    created = collections["listings"].created[0]
    assert created["name"] == "default"
    assert created["definition"] == INDEX_DEFINITIONS["listings"]()


def test_create_existing_without_skip(migrator):
    with pytest.raises(ValueError):
        migrator.create_index("movies", skip_existing=False)


def test_drop_all(migrator, collections):
    results = migrator.drop_all(wait_timeout_s=1)

    assert results == {"movies": True, "listings": True}
    assert collections["movies"].dropped == ["default"]
    assert collections["listings"].dropped == []


def test_recreate_all(migrator, collections):
    migrator.recreate_all(wait_timeout_s=1)

    assert collections["movies"].dropped == ["default"]
    assert len(collections["movies"].created) == 1
    assert len(collections["listings"].created) == 1


@pytest.mark.parametrize("command", ["drop", "recreate"])
def test_destructive_commands_require_confirm(command, monkeypatch, migrator):
    monkeypatch.setenv("MONGODB_URI", "mongodb://localhost:27017")
    monkeypatch.setattr("migrations.migrate.create_mongo_client", lambda cfg: _PingOnly())
    monkeypatch.setattr("migrations.migrate.Migrator", lambda client, cfg: migrator)

    assert main([command]) == 1


class _PingOnly:
    address = ("localhost", 27017)

    class admin:
        @staticmethod
        def command(name):
            return {"ok": 1}
