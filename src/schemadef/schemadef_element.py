"""
The storage format's native schema record and conversions to and from it.

Parquet files do not persist a tree. The footer stores the schema as a flat,
depth-first list of `SchemaElement` records in which every group carries the
number of direct children that follow it. This module models that record and
converts between it and `Column`:

Functions:
    column_to_element(column): One Column → one SchemaElement.
    column_from_element(element, children): One SchemaElement (+ children) → Column.
    flatten(column): Column tree → depth-first list of SchemaElement.
    unflatten(elements): Depth-first list of SchemaElement → Column tree.

Raises:
    ValueError: If an element list is empty, truncated, or has trailing records.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from schemadef.schemadef_ast import (
    Column,
    ConvertedType,
    LogicalType,
    PhysicalType,
    Repetition,
)


@dataclass(frozen=True)
class SchemaElement:
    """Mirror of parquet's thrift `SchemaElement`.

    A leaf has `type` set; a group has `type` unset and `num_children` set.
    `scale` and `precision` exist in the record but the text grammar never
    sets them.
    """

    name: str
    type: PhysicalType | None = None
    type_length: int | None = None
    repetition_type: Repetition | None = None
    num_children: int | None = None
    converted_type: ConvertedType | None = None
    scale: int | None = None
    precision: int | None = None
    field_id: int | None = None
    logical_type: LogicalType | None = None

    def is_set_type(self) -> bool:
        return self.type is not None

    def to_dict(self) -> dict[str, Any]:
        """JSON friendly form. Enums become their names; unset fields are omitted."""
        out: dict[str, Any] = {"name": self.name}
        if self.type is not None:
            out["type"] = self.type.name
        if self.type_length is not None:
            out["type_length"] = self.type_length
        if self.repetition_type is not None:
            out["repetition_type"] = self.repetition_type.name
        if self.num_children is not None:
            out["num_children"] = self.num_children
        if self.converted_type is not None:
            out["converted_type"] = self.converted_type.name
        if self.scale is not None:
            out["scale"] = self.scale
        if self.precision is not None:
            out["precision"] = self.precision
        if self.field_id is not None:
            out["field_id"] = self.field_id
        if self.logical_type is not None:
            out["logical_type"] = self.logical_type.to_dict()
        return out


def column_to_element(column: Column) -> SchemaElement:
    return SchemaElement(
        name=column.name,
        type=column.physical_type,
        type_length=column.type_length,
        repetition_type=column.repetition,
        num_children=len(column.children) if column.is_group else None,
        converted_type=column.converted_type,
        field_id=column.field_id,
        logical_type=column.logical_type,
    )


def column_from_element(
    element: SchemaElement, children: Iterable[Column] = ()
) -> Column:
    """Build a Column from its record and already-built children.

    Raises:
        ValueError: If a leaf record is given children, or the type length
            does not match the physical type.
    """
    return Column(
        element.name,
        element.repetition_type,
        physical_type=element.type,
        type_length=element.type_length,
        children=children,
        converted_type=element.converted_type,
        logical_type=element.logical_type,
        field_id=element.field_id,
    )


def flatten(column: Column) -> list[SchemaElement]:
    """Return the depth-first record list for the tree rooted at `column`."""
    elements = [column_to_element(column)]
    for child in column.children:
        elements.extend(flatten(child))
    return elements


def unflatten(elements: Sequence[SchemaElement]) -> Column:
    """Rebuild a tree from a depth-first record list.

    Raises:
        ValueError: If the list is empty, ends inside a group, or has records
            left over after the root group is complete.
    """
    if not elements:
        raise ValueError("Cannot rebuild a schema from an empty element list")

    def build(index: int) -> tuple[Column, int]:
        if index >= len(elements):
            raise ValueError("Element list ended before all group children were read")
        elem = elements[index]
        index += 1
        if elem.is_set_type():
            return column_from_element(elem), index
        children = []
        for _ in range(elem.num_children or 0):
            child, index = build(index)
            children.append(child)
        return column_from_element(elem, children), index

    root, consumed = build(0)
    if consumed != len(elements):
        raise ValueError(
            f"{len(elements) - consumed} trailing element(s) after the root group"
        )
    return root
