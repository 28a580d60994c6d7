"""Unit tests for query string encoding."""

import pytest

from linked_events import to_query_parameters


class TestToQueryParameters:
    """Test to_query_parameters."""

    def test_scalars_and_lists(self):
        """Lists are comma-joined, order follows the mapping."""
        params = {"start": "2021-01-17", "tags": ["a", "b"]}
        assert to_query_parameters(params) == "start=2021-01-17&tags=a,b"

    def test_key_order_preserved(self):
        """Keys appear in insertion order."""
        params = {"z": 1, "a": 2, "m": 3}
        assert to_query_parameters(params) == "z=1&a=2&m=3"

    @pytest.mark.parametrize("params", [{}, None])
    def test_empty(self, params):
        """No parameters encode to an empty string."""
        assert to_query_parameters(params) == ""

    def test_tuple_values(self):
        """Tuples are joined like lists."""
        assert to_query_parameters({"keyword": ("yso:p1", "yso:p2")}) == "keyword=yso:p1,yso:p2"

    def test_numeric_values(self):
        """Numbers are rendered with str()."""
        assert to_query_parameters({"page_size": 100, "ids": [1, 2]}) == "page_size=100&ids=1,2"

    def test_no_percent_encoding(self):
        """Reserved characters pass through untouched."""
        assert to_query_parameters({"text": "a b&c"}) == "text=a b&c"

    def test_input_not_mutated(self):
        """Caller's mapping is left unchanged."""
        params = {"tags": ["a", "b"]}
        to_query_parameters(params)
        assert params == {"tags": ["a", "b"]}
