import pytest

from atlas_search.projection import (
    ProjectionRegistry,
    ProjectionSpec,
    default_projection,
    resolve_projection,
)


class TestProjectionSpec:
    def test_included_fields(self):
        assert ProjectionSpec.include("title", "year").render() == {"title": True, "year": True}

    def test_type_tag_removed(self):
        spec = ProjectionSpec(included_fields={"_t": True, "title": True})
        assert spec.render() == {"title": True}

    def test_extra_expressions_override_structural_fields(self):
        spec = (
            ProjectionSpec.include("name", "address")
            .without_id()
            .with_fields({"address": False})
            .with_expressions({"address.location": True, "name": {"$toUpper": "$name"}})
        )
        assert spec.render() == {
            "name": {"$toUpper": "$name"},
            "address": False,
            "_id": False,
            "address.location": True,
        }

    def test_meta_fields_appended_last(self):
        spec = ProjectionSpec.include(
            "title", search_highlights=True, text_score=True, search_score=True
        )
        rendered = spec.render()
        assert list(rendered) == ["title", "searchHighlights", "textScore", "searchScore"]
        assert rendered["searchScore"] == {"$meta": "searchScore"}

    def test_render_does_not_share_expression_documents(self):
        spec = ProjectionSpec(extra_expressions={"score": {"$meta": "searchScore"}})
        spec.render()["score"]["$meta"] = "changed"
        assert spec.render() == {"score": {"$meta": "searchScore"}}

    def test_builders_do_not_mutate(self):
        base = ProjectionSpec.include("title")
        base.with_fields({"plot": True})
        assert base.render() == {"title": True}


class TestProjectionRegistry:
    def test_resolve_is_memoized(self, registry):
        calls = []

        class Movie:
            pass

        def factory():
            calls.append(1)
            return ProjectionSpec.include("title")

        registry.register(Movie, factory)

        first = registry.resolve(Movie)
        second = registry.resolve(Movie)

        assert first is second
        assert len(calls) == 1

    def test_unregistered_resolves_to_none(self, registry):
        class Unknown:
            pass

        assert registry.resolve(Unknown) is None
        assert resolve_projection(Unknown, registry=registry) is None

    def test_lookup_is_per_exact_type(self, registry):
        class Base:
            pass

        class Child(Base):
            pass

        registry.register(Base, ProjectionSpec.include("a"))
        assert registry.resolve(Child) is None

    def test_duplicate_registration(self, registry):
        class Movie:
            pass

        registry.register(Movie, ProjectionSpec.include("title"))
        with pytest.raises(ValueError):
            registry.register(Movie, ProjectionSpec.include("plot"))

    def test_register_after_resolve(self, registry):
        class Movie:
            pass

        registry.resolve(Movie)
        with pytest.raises(ValueError):
            registry.register(Movie, ProjectionSpec.include("title"))

    def test_factory_must_return_projection_spec(self, registry):
        class Movie:
            pass

        registry.register(Movie, lambda: {"title": True})
        with pytest.raises(TypeError):
            registry.resolve(Movie)

    def test_decorator(self, registry):
        @default_projection(ProjectionSpec.include("title"), registry=registry)
        class Movie:
            pass

        assert registry.is_registered(Movie)
        assert resolve_projection(Movie, registry=registry) == {"title": True}

    def test_explicit_projection_wins(self, registry):
        class Movie:
            pass

        registry.register(Movie, ProjectionSpec.include("title"))
        explicit = ProjectionSpec.include("plot")
        assert resolve_projection(Movie, explicit, registry) == {"plot": True}


class TestProjectionSpecImmutability:
    def test_fields_are_read_only(self):
        spec = ProjectionSpec.include("title").with_expressions({"_id": False})
        with pytest.raises(TypeError):
            spec.included_fields["plot"] = True
        with pytest.raises(TypeError):
            spec.extra_expressions["_id"] = True

    def test_caller_mapping_is_copied(self):
        fields = {"title": True}
        spec = ProjectionSpec(included_fields=fields)
        fields["plot"] = True
        assert spec.render() == {"title": True}

    def test_cached_default_cannot_be_mutated(self, registry):
        class Movie:
            pass

        registry.register(Movie, ProjectionSpec.include("title"))
        cached = registry.resolve(Movie)
        with pytest.raises(TypeError):
            cached.included_fields["secret"] = True
        assert resolve_projection(Movie, registry=registry) == {"title": True}

    def test_builders_still_work(self):
        spec = ProjectionSpec.include("title").with_fields({"plot": False}).without_id()
        assert spec.render() == {"title": True, "plot": False, "_id": False}
        assert spec == ProjectionSpec.include("title").with_fields({"plot": False}).without_id()
