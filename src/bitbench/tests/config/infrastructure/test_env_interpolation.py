"""Tests for ${VAR} expansion in raw config trees."""

from bitbench.config.infrastructure.env_interpolation import (
    expand,
    iter_strings,
    unset_references,
)


class TestIterStrings:
    def test_walks_nested_lists_and_mappings(self) -> None:
        data = {"a": "x", "b": [1, "y", {"c": "z"}], "d": None}
        assert list(iter_strings(data)) == ["x", "y", "z"]


class TestUnsetReferences:
    def test_reports_each_missing_name_once_in_order(self) -> None:
        data = {"a": "${B_VAR} and ${A_VAR}", "b": ["${B_VAR}", "${SET}"]}

        missing = unset_references(data, environ={"SET": "1"})

        assert missing == ["B_VAR", "A_VAR"]

    def test_plain_dollar_signs_are_not_references(self) -> None:
        assert unset_references({"price": "$5 or $HOME"}, environ={}) == []


class TestExpand:
    def test_replaces_every_reference(self) -> None:
        data = {"url": "https://${HOST}:${PORT}/hook", "n": 3, "flags": [True, "${HOST}"]}

        expanded = expand(data, environ={"HOST": "example.com", "PORT": "8443"})

        assert expanded == {
            "url": "https://example.com:8443/hook",
            "n": 3,
            "flags": [True, "example.com"],
        }

    def test_does_not_mutate_input(self) -> None:
        data = {"k": "${V}"}
        expand(data, environ={"V": "1"})
        assert data == {"k": "${V}"}
