"""
Defines the column tree produced by the schema definition parser.

Classes:
    Repetition, PhysicalType, ConvertedType, TimeUnit, LogicalTypeKind:
        Closed enumerations of the annotation values a column can carry. Their
        integer values match the storage format's thrift encoding.

    LogicalType:
        A modern type annotation, parameterized for TIMESTAMP.

    Column:
        The single node type for both leaf fields and groups. A column with a
        physical type is a leaf and has no children; a column without one is a
        group whose children (possibly none) are kept in declaration order.

    ColumnDict:
        TypedDict form of a Column for serialization and debugging.

Columns are immutable once built: children are stored as a tuple and the
attributes are not reassigned by any operation in this package.

Example:
    leaf = Column("a", Repetition.REQUIRED, physical_type=PhysicalType.INT32)
    root = Column("m", children=[leaf])
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, TypedDict


class Repetition(Enum):
    REQUIRED = 0
    OPTIONAL = 1
    REPEATED = 2


class PhysicalType(Enum):
    BOOLEAN = 0
    INT32 = 1
    INT64 = 2
    INT96 = 3
    FLOAT = 4
    DOUBLE = 5
    BINARY = 6
    BYTE_ARRAY = 6  # storage format spelling of BINARY
    FIXED_LEN_BYTE_ARRAY = 7


class ConvertedType(Enum):
    UTF8 = 0
    MAP = 1
    MAP_KEY_VALUE = 2
    LIST = 3
    ENUM = 4
    DECIMAL = 5
    DATE = 6
    TIME_MILLIS = 7
    TIME_MICROS = 8
    TIMESTAMP_MILLIS = 9
    TIMESTAMP_MICROS = 10
    UINT_8 = 11
    UINT_16 = 12
    UINT_32 = 13
    UINT_64 = 14
    INT_8 = 15
    INT_16 = 16
    INT_32 = 17
    INT_64 = 18
    JSON = 19
    BSON = 20
    INTERVAL = 21


class TimeUnit(Enum):
    MILLIS = "MILLIS"
    MICROS = "MICROS"
    NANOS = "NANOS"


class LogicalTypeKind(Enum):
    STRING = "STRING"
    DATE = "DATE"
    TIMESTAMP = "TIMESTAMP"
    UUID = "UUID"
    ENUM = "ENUM"
    JSON = "JSON"


@dataclass(frozen=True)
class LogicalType:
    """A logical type annotation.

    Only TIMESTAMP carries parameters, and it always carries both of them.

    Attributes:
        kind (LogicalTypeKind): Which logical type this is.
        unit (TimeUnit | None): Timestamp resolution, TIMESTAMP only.
        is_adjusted_to_utc (bool | None): Timestamp UTC flag, TIMESTAMP only.

    Raises:
        ValueError: If the parameters do not match the kind.
    """

    kind: LogicalTypeKind
    unit: TimeUnit | None = None
    is_adjusted_to_utc: bool | None = None

    def __post_init__(self) -> None:
        if self.kind is LogicalTypeKind.TIMESTAMP:
            if self.unit is None or self.is_adjusted_to_utc is None:
                raise ValueError("TIMESTAMP requires a unit and a UTC flag")
        elif self.unit is not None or self.is_adjusted_to_utc is not None:
            raise ValueError(f"{self.kind.name} takes no parameters")

    @classmethod
    def timestamp(cls, unit: TimeUnit, is_adjusted_to_utc: bool) -> "LogicalType":
        return cls(LogicalTypeKind.TIMESTAMP, unit, is_adjusted_to_utc)

    def to_dict(self) -> dict[str, Any]:
        if self.kind is LogicalTypeKind.TIMESTAMP:
            assert self.unit is not None  # for mypy
            return {
                "kind": self.kind.name,
                "unit": self.unit.name,
                "is_adjusted_to_utc": self.is_adjusted_to_utc,
            }
        return {"kind": self.kind.name}


class ColumnDict(TypedDict, total=False):
    """Serialized shape of a Column. Absent annotations are None."""

    name: str
    repetition: str | None
    physical_type: str | None
    type_length: int | None
    converted_type: str | None
    logical_type: dict[str, Any] | None
    field_id: int | None
    children: list["ColumnDict"]


class Column:
    """
    A node in the schema tree: either a leaf field or a group.

    Args:
        name (str): Column name; non-empty.
        repetition (Repetition, optional): Repetition of the column. Only the
            synthetic message root goes without one.
        physical_type (PhysicalType, optional): Storage type. Present exactly
            when the column is a leaf.
        type_length (int, optional): Byte width, FIXED_LEN_BYTE_ARRAY only.
        children (Iterable[Column], optional): Child columns of a group.
        converted_type (ConvertedType, optional): Legacy annotation.
        logical_type (LogicalType, optional): Modern annotation.
        field_id (int, optional): External identifier. 0 is a valid id.

    Raises:
        ValueError: If the leaf/group shape or the type length is inconsistent.
    """

    def __init__(
        self,
        name: str,
        repetition: Repetition | None = None,
        physical_type: PhysicalType | None = None,
        type_length: int | None = None,
        children: Iterable["Column"] | None = None,
        converted_type: ConvertedType | None = None,
        logical_type: LogicalType | None = None,
        field_id: int | None = None,
    ):
        if not name:
            raise ValueError("Column name must not be empty")
        kids = tuple(children) if children is not None else ()
        if physical_type is not None and kids:
            raise ValueError(f"Leaf column {name!r} cannot have children")
        if physical_type is PhysicalType.FIXED_LEN_BYTE_ARRAY:
            if type_length is None or type_length <= 0:
                raise ValueError(
                    f"Column {name!r}: fixed_len_byte_array needs a positive length"
                )
        elif type_length is not None:
            raise ValueError(
                f"Column {name!r}: type length is only valid for fixed_len_byte_array"
            )

        self.name = name
        self.repetition = repetition
        self.physical_type = physical_type
        self.type_length = type_length
        self.children: tuple["Column", ...] = kids
        self.converted_type = converted_type
        self.logical_type = logical_type
        self.field_id = field_id

    @property
    def is_leaf(self) -> bool:
        return self.physical_type is not None

    @property
    def is_group(self) -> bool:
        return self.physical_type is None

    def child(self, name: str) -> "Column | None":
        """Return the first direct child called `name`, or None."""
        for c in self.children:
            if c.name == name:
                return c
        return None

    def __repr__(self) -> str:
        parts = [repr(self.name)]
        if self.repetition is not None:
            parts.append(self.repetition.name)
        if self.physical_type is not None:
            typ = self.physical_type.name
            if self.type_length is not None:
                typ += f"({self.type_length})"
            parts.append(typ)
        if self.converted_type is not None:
            parts.append(f"converted_type={self.converted_type.name}")
        if self.logical_type is not None:
            parts.append(f"logical_type={self.logical_type.kind.name}")
        if self.field_id is not None:
            parts.append(f"field_id={self.field_id}")
        if self.is_group:
            preview = ", ".join(repr(c) for c in self.children[:3])
            if len(self.children) > 3:
                preview += ", ..."
            parts.append(f"children=[{preview}]")
        return f"Column({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Column):
            return False
        return (
            self.name == other.name
            and self.repetition == other.repetition
            and self.physical_type == other.physical_type
            and self.type_length == other.type_length
            and self.converted_type == other.converted_type
            and self.logical_type == other.logical_type
            and self.field_id == other.field_id
            and self.children == other.children
        )

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> ColumnDict:
        def enum_name(value: Enum | None) -> str | None:
            return value.name if value is not None else None

        return {
            "name": self.name,
            "repetition": enum_name(self.repetition),
            "physical_type": enum_name(self.physical_type),
            "type_length": self.type_length,
            "converted_type": enum_name(self.converted_type),
            "logical_type": self.logical_type.to_dict() if self.logical_type else None,
            "field_id": self.field_id,
            "children": [c.to_dict() for c in self.children],
        }
