import pytest

from schemadef.schemadef_ast import (
    Column,
    ConvertedType,
    LogicalType,
    LogicalTypeKind,
    PhysicalType,
    Repetition,
)
from schemadef.schemadef_element import (
    SchemaElement,
    column_from_element,
    column_to_element,
    flatten,
    unflatten,
)

ITEM = Column("item", Repetition.REPEATED, physical_type=PhysicalType.BINARY)
LIST_GROUP = Column(
    "g", Repetition.OPTIONAL, converted_type=ConvertedType.LIST, children=[ITEM]
)
ID = Column(
    "id",
    Repetition.REQUIRED,
    physical_type=PhysicalType.FIXED_LEN_BYTE_ARRAY,
    type_length=16,
    logical_type=LogicalType(LogicalTypeKind.UUID),
    field_id=3,
)
ROOT = Column("m", children=[LIST_GROUP, ID])


def test_leaf_to_element() -> None:
    elem = column_to_element(ID)
    assert elem == SchemaElement(
        name="id",
        type=PhysicalType.FIXED_LEN_BYTE_ARRAY,
        type_length=16,
        repetition_type=Repetition.REQUIRED,
        field_id=3,
        logical_type=LogicalType(LogicalTypeKind.UUID),
    )
    assert elem.is_set_type()
    assert elem.num_children is None


def test_group_to_element() -> None:
    elem = column_to_element(LIST_GROUP)
    assert not elem.is_set_type()
    assert elem.num_children == 1
    assert elem.converted_type is ConvertedType.LIST
    assert elem.repetition_type is Repetition.OPTIONAL


def test_root_element_has_no_repetition() -> None:
    elem = column_to_element(ROOT)
    assert elem.repetition_type is None
    assert elem.num_children == 2


def test_empty_group_reports_zero_children() -> None:
    assert column_to_element(Column("g", Repetition.REQUIRED)).num_children == 0


def test_column_from_element() -> None:
    assert column_from_element(column_to_element(ID)) == ID
    assert column_from_element(column_to_element(LIST_GROUP), [ITEM]) == LIST_GROUP


def test_leaf_element_with_children_is_rejected() -> None:
    with pytest.raises(ValueError):
        column_from_element(column_to_element(ID), [ITEM])


def test_flatten_is_depth_first_with_child_counts() -> None:
    elements = flatten(ROOT)
    assert [e.name for e in elements] == ["m", "g", "item", "id"]
    assert [e.num_children for e in elements] == [2, 1, None, None]


def test_unflatten_rebuilds_the_tree() -> None:
    assert unflatten(flatten(ROOT)) == ROOT


def test_unflatten_rejects_bad_lists() -> None:
    with pytest.raises(ValueError, match="empty"):
        unflatten([])
    with pytest.raises(ValueError, match="ended before"):
        unflatten(flatten(ROOT)[:-1])
    with pytest.raises(ValueError, match="trailing"):
        unflatten(flatten(ROOT) + [column_to_element(ITEM)])


def test_to_dict_omits_unset_fields() -> None:
    assert column_to_element(ITEM).to_dict() == {
        "name": "item",
        "type": "BINARY",
        "repetition_type": "REPEATED",
    }
    assert column_to_element(ID).to_dict() == {
        "name": "id",
        "type": "FIXED_LEN_BYTE_ARRAY",
        "type_length": 16,
        "repetition_type": "REQUIRED",
        "field_id": 3,
        "logical_type": {"kind": "UUID"},
    }
    assert SchemaElement(name="d", scale=2, precision=9).to_dict() == {
        "name": "d",
        "scale": 2,
        "precision": 9,
    }
