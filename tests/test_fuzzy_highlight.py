import pytest

from atlas_search.definitions import FuzzyOptions, HighlightOptions


class TestFuzzyOptions:
    def test_defaults_render_empty(self):
        assert FuzzyOptions().render() == {}

    def test_only_non_defaults_rendered(self):
        assert FuzzyOptions(max_edits=1, max_expansions=10).render() == {
            "maxEdits": 1,
            "maxExpansions": 10,
        }
        assert FuzzyOptions(prefix_length=2).render() == {"prefixLength": 2}

    @pytest.mark.parametrize(
        "kwargs",
        [{"max_edits": 0}, {"max_edits": 3}, {"prefix_length": -1}, {"max_expansions": 0}],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            FuzzyOptions(**kwargs)


class TestHighlightOptions:
    def test_defaults_render_path_only(self):
        assert HighlightOptions("title").render() == {"path": "title"}

    def test_non_defaults_rendered(self):
        options = HighlightOptions(["title", "plot"], max_characters_to_examine=1000, max_num_passages=2)
        assert options.render() == {
            "path": ["title", "plot"],
            "maxCharactersToExamine": 1000,
            "maxNumPassages": 2,
        }

    def test_non_positive_rejected(self):
        with pytest.raises(ValueError):
            HighlightOptions("title", max_num_passages=0)
