"""
Unit tests for engine/record.py
"""

import copy
import pickle

import pytest

from propgraph.engine.record import ResultRecord


class TestResultRecord:
    """Test the read-only result mapping."""

    @pytest.fixture
    def record(self):
        return ResultRecord({"p": 3, "q": 10})

    def test_mapping_access(self, record):
        assert record["p"] == 3
        assert list(record) == ["p", "q"]
        assert len(record) == 2
        assert record == {"p": 3, "q": 10}

    def test_attribute_access(self, record):
        assert record.q == 10
        with pytest.raises(AttributeError):
            record.missing

    def test_read_only(self, record):
        """Test neither items nor attributes can be changed."""
        with pytest.raises(TypeError):
            record["p"] = 4
        with pytest.raises(AttributeError):
            record.p = 4
        with pytest.raises(AttributeError):
            del record.p

    def test_source_mapping_copied(self):
        values = {"p": 1}
        record = ResultRecord(values)
        values["p"] = 2
        assert record["p"] == 1

    def test_repr(self, record):
        assert repr(record) == "ResultRecord(p=3, q=10)"

    def test_to_dict(self, record):
        data = record.to_dict()
        data["p"] = 0
        assert record["p"] == 3

    def test_copy(self, record):
        """Test shallow and deep copies keep the values."""
        assert copy.copy(record) == record
        duplicate = copy.deepcopy(ResultRecord({"p": [1, 2]}))
        assert duplicate == {"p": [1, 2]}
        assert isinstance(duplicate, ResultRecord)

    def test_pickle(self, record):
        restored = pickle.loads(pickle.dumps(record))
        assert restored == record
        assert list(restored) == ["p", "q"]
        assert restored.q == 10

    def test_method_names_need_item_access(self):
        """Test properties named like mapping methods stay reachable by key."""
        record = ResultRecord({"keys": 5, "get": 6})
        assert record["keys"] == 5
        assert record["get"] == 6
        assert callable(record.keys)
