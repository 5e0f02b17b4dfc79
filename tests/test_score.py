import pytest

from atlas_search.definitions import (
    AutocompleteScoreOptions,
    EmbeddedScoreOptions,
    ScoreOptions,
)
from atlas_search.definitions.score import BoostScore, EmbeddedScore, FunctionScore
from atlas_search.definitions.values import FieldPath


class TestScoreOptions:
    def test_boost_value(self):
        assert ScoreOptions.boost(3).render() == {"boost": {"value": 3}}

    def test_boost_path_omits_default_undefined(self):
        assert ScoreOptions.boost_path("imdb.rating").render() == {
            "boost": {"path": "imdb.rating"}
        }

    def test_boost_path_with_undefined(self):
        assert ScoreOptions.boost_path("imdb.rating", undefined=1).render() == {
            "boost": {"path": "imdb.rating", "undefined": 1}
        }

    def test_constant(self):
        assert ScoreOptions.constant(5).render() == {"constant": {"value": 5}}

    def test_function(self):
        expression = {"path": {"value": "imdb.votes", "undefined": 2}}
        assert ScoreOptions.function(expression).render() == {"function": expression}

    def test_none_value_rejected(self):
        with pytest.raises(ValueError):
            ScoreOptions.boost(None)

    def test_empty_options_fail_on_render(self):
        with pytest.raises(RuntimeError):
            ScoreOptions().render()


class TestAutocompleteScoreOptions:
    def test_boost_and_constant(self):
        assert AutocompleteScoreOptions.boost(2).render() == {"boost": {"value": 2}}
        assert AutocompleteScoreOptions.constant(1).render() == {"constant": {"value": 1}}

    def test_function_not_supported(self):
        assert not hasattr(AutocompleteScoreOptions, "function")
        with pytest.raises(ValueError):
            AutocompleteScoreOptions(FunctionScore({"score": "relevance"}))


class TestEmbeddedScoreOptions:
    def test_default_aggregate_is_elided(self):
        assert EmbeddedScoreOptions.embedded().render() == {"embedded": {}}

    def test_aggregate_and_outer_scope(self):
        options = EmbeddedScoreOptions.embedded("maximum", ScoreOptions.boost(2))
        assert options.render() == {
            "embedded": {"aggregate": "maximum", "outerScope": {"boost": {"value": 2}}}
        }

    def test_invalid_aggregate(self):
        with pytest.raises(ValueError):
            EmbeddedScoreOptions.embedded("median")

    def test_outer_scope_cannot_nest_embedded(self):
        with pytest.raises(TypeError):
            EmbeddedScoreOptions.embedded("sum", EmbeddedScoreOptions.embedded())


class TestScorePayloads:
    def test_boost_rejects_value_and_path_together(self):
        with pytest.raises(ValueError):
            BoostScore(value=2, path=FieldPath.of("imdb.rating"))

    def test_boost_path_string_is_coerced(self):
        options = ScoreOptions(BoostScore(path="imdb.rating"))
        assert options.strategy.path == FieldPath.of("imdb.rating")
        assert options.render() == {"boost": {"path": "imdb.rating"}}

    def test_boost_without_value_or_path_fails_on_render(self):
        with pytest.raises(RuntimeError):
            ScoreOptions(BoostScore()).render()

    def test_embedded_rejects_unknown_aggregate(self):
        with pytest.raises(ValueError):
            EmbeddedScore(aggregate="median")

    def test_embedded_rejects_nested_embedded_outer_scope(self):
        with pytest.raises(TypeError):
            EmbeddedScore(outer_scope=EmbeddedScoreOptions.embedded())

    def test_embedded_rejects_non_score_outer_scope(self):
        with pytest.raises(TypeError):
            EmbeddedScore(outer_scope={"boost": {"value": 2}})
