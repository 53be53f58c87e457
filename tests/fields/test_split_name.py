from __future__ import annotations

import pytest

from localestring.domain.errors import ConfigurationError, TypeCoercionError
from localestring.domain.interfaces.enums import Boolean, Operator
from localestring.domain.value_objects.templates import FieldTemplate
from localestring.fields import SplitName
from localestring.fields.registry import build
from localestring.infrastructure.query_builder import Comparison, Group, NullCheck, QueryBuilder
from localestring.schema import Schema


def _name(**kwargs) -> tuple[Schema, SplitName]:
    name = SplitName.of(name="name", **kwargs)
    return Schema("people", [name]), name


def test_children_are_lastname_then_firstname() -> None:
    _, name = _name()
    assert list(name.fields) == ["lastname", "firstname"]
    assert name.columns() == ["lastname", "firstname"]
    assert name.get_field("lastname").max_length == 100


@pytest.mark.parametrize(
    "value, parts",
    [
        ("Doe Jane", ("Doe", "Jane")),
        ("Doe  Mary Jane", ("Doe", "Mary Jane")),
        ("  Doe Jane ", ("Doe", "Jane ")),
        ("Doe", ("Doe", None)),
        ("", (None, None)),
    ],
)
def test_split(value: str, parts: tuple) -> None:
    assert SplitName.split(value) == parts


def test_split_rejects_null() -> None:
    with pytest.raises(TypeCoercionError):
        SplitName.split(None)


@pytest.mark.parametrize("value", ["Doe Jane", "Smith Bob", "van Damme"])
def test_join_inverts_split(value: str) -> None:
    assert SplitName.join(*SplitName.split(value)) == value


def test_join_skips_missing_parts() -> None:
    assert SplitName.join("Doe", None) == "Doe"
    assert SplitName.join(None, "Jane") == "Jane"
    assert SplitName.join(None, None) is None


def test_set_routes_parts_to_children() -> None:
    schema, name = _name()
    record = schema.new_record()
    assert name.set(record, "Doe Jane") is True
    assert record["lastname"] == "Doe"
    assert record["firstname"] == "Jane"
    assert name.resolve(record) == "Doe Jane"

    name.set(record, None)
    assert record["lastname"] is None
    assert record["firstname"] is None
    assert name.get(record) is None


def test_rejected_write_leaves_record_unchanged() -> None:
    name = SplitName.of(FieldTemplate(type="string", options={"max_length": 5}), name="name")
    schema = Schema("people", [name])
    record = schema.new_record({"name": "Doe Jane"})

    with pytest.raises(TypeCoercionError):
        name.set(record, "Smith Bartholomew")

    assert record["lastname"] == "Doe"
    assert record["firstname"] == "Jane"
    assert name.resolve(record) == "Doe Jane"


def test_key_order_decides_which_part_goes_where() -> None:
    schema, name = _name(keys=["firstname", "lastname"])
    record = schema.new_record({"name": "Jane Doe"})
    assert record["firstname"] == "Jane"
    assert record["lastname"] == "Doe"


def test_exactly_two_children_required() -> None:
    with pytest.raises(ConfigurationError):
        SplitName("name", build(FieldTemplate(type="string"), ["a", "b", "c"], name="name"))
    with pytest.raises(ConfigurationError):
        SplitName.of(name="name", keys=["lastname"])


def test_where_builds_one_nested_group() -> None:
    _, name = _name()
    qb = QueryBuilder("people")
    assert name.where(qb, Operator.EQUAL, "Doe Jane") is qb

    [condition] = qb.wheres
    assert condition.boolean is Boolean.AND
    assert isinstance(condition.node, Group)
    leaves = [c.node for c in condition.node.conditions]
    assert leaves == [
        Comparison("lastname", Operator.EQUAL, "Doe"),
        Comparison("firstname", Operator.EQUAL, "Jane"),
    ]
    assert [c.boolean for c in condition.node.conditions] == [Boolean.AND, Boolean.AND]
    assert qb.to_sql() == ("(lastname = ? AND firstname = ?)", ["Doe", "Jane"])


def test_where_joins_outer_builder_with_given_boolean() -> None:
    _, name = _name()
    qb = QueryBuilder("people").where("id", ">", 3)
    name.where(qb, "<>", "Doe Jane", "or")
    assert qb.wheres[1].boolean is Boolean.OR
    assert qb.to_sql() == ("id > ? OR (lastname <> ? AND firstname <> ?)", [3, "Doe", "Jane"])


def test_where_with_single_part_checks_missing_part_for_null() -> None:
    _, name = _name()
    qb = name.where(QueryBuilder("people"), "=", "Doe")
    assert qb.to_sql() == ("(lastname = ? AND firstname IS NULL)", ["Doe"])


def test_where_like_with_single_part_leaves_missing_column_out() -> None:
    _, name = _name()
    qb = name.where(QueryBuilder("people"), Operator.LIKE, "Doe%")
    assert qb.to_sql() == ("(lastname LIKE ?)", ["Doe%"])

    qb = name.where(QueryBuilder("people"), "like", "Doe% J%")
    assert qb.to_sql() == ("(lastname LIKE ? AND firstname LIKE ?)", ["Doe%", "J%"])


def test_where_null_and_not_null_negate_each_leaf() -> None:
    _, name = _name()
    qb = name.where_null(QueryBuilder("people"))
    assert qb.to_sql() == ("(lastname IS NULL AND firstname IS NULL)", [])

    qb = name.where_not_null(QueryBuilder("people"))
    [condition] = qb.wheres
    assert [c.node for c in condition.node.conditions] == [
        NullCheck("lastname", True),
        NullCheck("firstname", True),
    ]
    assert [c.boolean for c in condition.node.conditions] == [Boolean.AND, Boolean.AND]
    assert qb.to_sql() == ("(lastname IS NOT NULL AND firstname IS NOT NULL)", [])


def test_where_in_is_a_disjunction_of_conjunctions() -> None:
    _, name = _name()
    qb = name.where_in(QueryBuilder("people"), ["Doe Jane", "Smith Bob"])

    [outer] = qb.wheres
    candidates = outer.node.conditions
    assert len(candidates) == 2
    assert candidates[1].boolean is Boolean.OR
    for candidate, (last, first) in zip(candidates, [("Doe", "Jane"), ("Smith", "Bob")]):
        assert isinstance(candidate.node, Group)
        assert [c.node for c in candidate.node.conditions] == [
            Comparison("lastname", Operator.EQUAL, last),
            Comparison("firstname", Operator.EQUAL, first),
        ]
        assert candidate.node.conditions[1].boolean is Boolean.AND

    assert qb.to_sql() == (
        "((lastname = ? AND firstname = ?) OR (lastname = ? AND firstname = ?))",
        ["Doe", "Jane", "Smith", "Bob"],
    )


def test_where_not_in_is_a_conjunction_of_exclusions() -> None:
    _, name = _name()
    qb = name.where_not_in(QueryBuilder("people"), ["Doe Jane", "Smith Bob"])

    [outer] = qb.wheres
    candidates = outer.node.conditions
    assert candidates[1].boolean is Boolean.AND
    assert [c.node.operator for c in candidates[0].node.conditions] == [
        Operator.DIFFERENT,
        Operator.DIFFERENT,
    ]
    assert qb.to_sql() == (
        "((lastname <> ? AND firstname <> ?) AND (lastname <> ? AND firstname <> ?))",
        ["Doe", "Jane", "Smith", "Bob"],
    )


def test_where_in_empty_candidates() -> None:
    _, name = _name()
    assert name.where_in(QueryBuilder("people"), []).to_sql() == ("0 = 1", [])
    assert name.where_not_in(QueryBuilder("people"), []).to_sql() == ("1 = 1", [])


def test_null_values_are_rejected_before_touching_builder() -> None:
    _, name = _name()
    qb = QueryBuilder("people")
    with pytest.raises(TypeCoercionError):
        name.where(qb, "=", None)
    with pytest.raises(TypeCoercionError):
        name.where_in(qb, ["Doe Jane", None])
    assert qb.wheres == []


def test_builder_errors_propagate() -> None:
    _, name = _name()
    qb = QueryBuilder("people")
    with pytest.raises(ValueError, match="Unknown operator"):
        name.where(qb, "~~", "Doe Jane")
    assert qb.wheres == []
