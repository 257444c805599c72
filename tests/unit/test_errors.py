"""
Unit tests for errors/taxonomy.py
"""

from propgraph.errors import (
    CycleError,
    DispatchError,
    ErrorCategory,
    ErrorCode,
    EvaluationError,
    PropertyGraphError,
    SchemaError,
    SchemaFrozenError,
    UndeclaredPropertyError,
)


class TestHierarchy:
    """Test error classification."""

    def test_schema_errors(self):
        for cls in (CycleError, UndeclaredPropertyError, SchemaFrozenError):
            assert issubclass(cls, SchemaError)
            assert cls.category is ErrorCategory.SCHEMA

    def test_evaluation_errors(self):
        assert issubclass(DispatchError, EvaluationError)
        assert DispatchError.category is ErrorCategory.EVALUATION

    def test_common_base(self):
        assert issubclass(SchemaError, PropertyGraphError)
        assert issubclass(EvaluationError, PropertyGraphError)

    def test_codes(self):
        assert CycleError.code is ErrorCode.SCH_CYCLE
        assert DispatchError.code is ErrorCode.EVL_NO_MATCH
        assert SchemaError.code is ErrorCode.SCH_INVALID

    def test_base_to_dict(self):
        data = PropertyGraphError("boom").to_dict()
        assert data == {"code": None, "category": None, "error": "PropertyGraphError", "message": "boom"}


class TestCycleError:
    """Test CycleError."""

    def test_vertices_and_message(self):
        error = CycleError(["b", "a"], ["a", "b", "a"])

        assert error.vertices == frozenset({"a", "b"})
        assert str(error) == "Cyclic dependency between properties: a, b (e.g. a -> b -> a)"

    def test_without_path(self):
        error = CycleError({"a"})
        assert error.cycle_path == []
        assert str(error) == "Cyclic dependency between properties: a"

    def test_to_dict(self):
        data = CycleError({"b", "a"}, ["a", "b", "a"]).to_dict()
        assert data["code"] == 1001
        assert data["category"] == "schema"
        assert data["error"] == "CycleError"
        assert data["vertices"] == ["a", "b"]
        assert data["cycle_path"] == ["a", "b", "a"]


class TestUndeclaredPropertyError:
    """Test UndeclaredPropertyError."""

    def test_missing_sorted(self):
        error = UndeclaredPropertyError({"y": {"c"}, "x": {"b", "a"}})

        assert error.missing == {"x": ["a", "b"], "y": ["c"]}
        assert str(error) == "Undeclared properties: 'x' required by a, b; 'y' required by c"
        assert error.to_dict()["missing"] == {"x": ["a", "b"], "y": ["c"]}


class TestDispatchError:
    """Test DispatchError."""

    def test_with_partial(self):
        partial = {"p": 4}
        error = DispatchError("q", partial, 3)
        partial["p"] = 5

        assert error.property_name == "q"
        assert error.partial == {"p": 4}
        assert str(error) == "No clause of property 'q' matched (3 clauses tried); partial result: {'p': 4}"

    def test_without_partial(self):
        error = DispatchError("q", None, 3)
        assert error.partial is None
        assert str(error) == "No clause of property 'q' matched (3 clauses tried)"

    def test_to_dict(self):
        data = DispatchError("q", {"p": "x"}, 2).to_dict()
        assert data["code"] == 2001
        assert data["category"] == "evaluation"
        assert data["property"] == "q"
        assert data["clause_count"] == 2
        assert data["partial"] == {"p": "'x'"}
