import pytest

from schemadef.schemadef_ast import (
    Column,
    ConvertedType,
    LogicalType,
    LogicalTypeKind,
    PhysicalType,
    Repetition,
    TimeUnit,
)
from schemadef.schemadef_lexer import Token, tokenize
from schemadef.schemadef_parser import Parser, SchemaParseError


def parse(source: str) -> Column:
    return Parser(tokenize(source)).parse()


def parse_error(source: str) -> SchemaParseError:
    with pytest.raises(SchemaParseError) as exc:
        parse(source)
    return exc.value


def only_child(source: str) -> Column:
    root = parse(source)
    assert len(root.children) == 1
    return root.children[0]


def test_single_required_leaf() -> None:
    root = parse("message m { required int32 a; }")
    assert root.name == "m"
    assert root.is_group
    assert root.repetition is None
    assert root.children == (
        Column("a", Repetition.REQUIRED, physical_type=PhysicalType.INT32),
    )


def test_group_with_converted_type() -> None:
    g = only_child("message m { optional group g (LIST) { repeated binary item; } }")
    assert g.name == "g"
    assert g.repetition is Repetition.OPTIONAL
    assert g.converted_type is ConvertedType.LIST
    assert g.physical_type is None
    assert g.children == (
        Column("item", Repetition.REPEATED, physical_type=PhysicalType.BINARY),
    )


def test_fixed_len_byte_array_length() -> None:
    col = only_child("message m { required fixed_len_byte_array(16) id; }")
    assert col.physical_type is PhysicalType.FIXED_LEN_BYTE_ARRAY
    assert col.type_length == 16


def test_timestamp_logical_type_and_field_id() -> None:
    col = only_child("message m { optional int64 ts (TIMESTAMP(MICROS, true)) = 5; }")
    assert col.logical_type == LogicalType.timestamp(TimeUnit.MICROS, True)
    assert col.field_id == 5


def test_missing_repetition_reports_type_token() -> None:
    err = parse_error("message m { int32 a; }")
    assert err.token == Token("IDENT", "int32", 1, 13)
    assert (err.line, err.col) == (1, 13)
    assert "repetition" in err.expected


@pytest.mark.parametrize(  # type: ignore[misc]
    "keyword, expected",
    [
        ("binary", PhysicalType.BINARY),
        ("float", PhysicalType.FLOAT),
        ("double", PhysicalType.DOUBLE),
        ("boolean", PhysicalType.BOOLEAN),
        ("int32", PhysicalType.INT32),
        ("int64", PhysicalType.INT64),
        ("int96", PhysicalType.INT96),
    ],
)
def test_primitive_types(keyword: str, expected: PhysicalType) -> None:
    col = only_child(f"message m {{ required {keyword} x; }}")
    assert col.physical_type is expected
    assert col.type_length is None


@pytest.mark.parametrize(  # type: ignore[misc]
    "keyword", ["STRING", "DATE", "UUID", "ENUM", "JSON"]
)
def test_parameterless_logical_types(keyword: str) -> None:
    col = only_child(f"message m {{ optional binary x ({keyword}); }}")
    assert col.logical_type == LogicalType(LogicalTypeKind[keyword])


@pytest.mark.parametrize("unit", ["MILLIS", "MICROS", "NANOS"])  # type: ignore[misc]
def test_timestamp_units(unit: str) -> None:
    col = only_child(f"message m {{ required int64 t (TIMESTAMP({unit}, false)); }}")
    assert col.logical_type == LogicalType.timestamp(TimeUnit[unit], False)


def test_every_converted_type_on_groups() -> None:
    for ct in ConvertedType:
        g = only_child(f"message m {{ required group g ({ct.name}) {{ }} }}")
        assert g.converted_type is ct


def test_declaration_order_is_child_order() -> None:
    root = parse(
        """
        message m {
          required int32 c;
          optional group b {
            required int32 z;
            required int32 y;
          }
          required int32 a;
        }
        """
    )
    assert [c.name for c in root.children] == ["c", "b", "a"]
    assert [c.name for c in root.children[1].children] == ["z", "y"]


def test_empty_message_and_empty_group() -> None:
    assert parse("message m {}").children == ()
    g = only_child("message m { repeated group g {} }")
    assert g.is_group
    assert g.children == ()


def test_deeply_nested_groups() -> None:
    root = parse(
        "message m { required group a { optional group b { repeated group c {"
        " required boolean leaf; } } } }"
    )
    c = root.children[0].children[0].children[0]
    assert c.name == "c"
    assert c.children[0].physical_type is PhysicalType.BOOLEAN


def test_very_deep_nesting_raises_parse_error() -> None:
    depth = 5000
    source = (
        "message m { "
        + "required group g { " * depth
        + "required int32 leaf; "
        + "} " * depth
        + "}"
    )
    with pytest.raises(SchemaParseError) as exc:
        parse(source)
    assert exc.value.expected == "shallower group nesting"


def test_moderate_nesting_parses() -> None:
    depth = 50
    source = "message m { " + "optional group g { " * depth + "} " * depth + "}"
    col = parse(source)
    for _ in range(depth):
        assert len(col.children) == 1
        col = col.children[0]
    assert col.name == "g"
    assert col.children == ()


def test_field_id_zero_is_kept() -> None:
    col = only_child("message m { required int32 a = 0; }")
    assert col.field_id == 0
    assert only_child("message m { required int32 a; }").field_id is None


def test_zero_padded_numbers() -> None:
    assert only_child("message m { required int32 a = 000000000005; }").field_id == 5
    assert only_child("message m { required int32 a = 00; }").field_id == 0
    col = only_child("message m { required fixed_len_byte_array(0000000000016) id; }")
    assert col.type_length == 16
    err = parse_error("message m { required int32 a = 002147483648; }")
    assert "malformed integer" in err.expected
    parse_error("message m { required fixed_len_byte_array(000) id; }")


def test_field_id_int32_limits() -> None:
    assert only_child("message m { required int32 a = 2147483647; }").field_id == (
        2**31 - 1
    )
    err = parse_error("message m { required int32 a = 2147483648; }")
    assert "malformed integer" in err.expected
    err = parse_error("message m { required int32 a = " + "9" * 5000 + "; }")
    assert "malformed integer" in err.expected


def test_keywords_are_valid_names() -> None:
    root = parse("message message { required int32 group; required group required {} }")
    assert root.name == "message"
    assert [c.name for c in root.children] == ["group", "required"]


def test_duplicate_names_are_accepted() -> None:
    root = parse("message m { required int32 a = 1; optional int64 a = 1; }")
    assert [c.name for c in root.children] == ["a", "a"]


def test_fixed_len_byte_array_requires_positive_length() -> None:
    err = parse_error("message m { required fixed_len_byte_array(0) id; }")
    assert err.token.value == "0"
    parse_error("message m { required fixed_len_byte_array id; }")
    parse_error("message m { required fixed_len_byte_array(x) id; }")


def test_timestamp_requires_parameters() -> None:
    err = parse_error("message m { required int64 t (TIMESTAMP); }")
    assert err.token.type == "RPAREN"
    parse_error("message m { required int64 t (TIMESTAMP(SECONDS, true)); }")
    parse_error("message m { required int64 t (TIMESTAMP(MILLIS true)); }")
    parse_error("message m { required int64 t (TIMESTAMP(MILLIS, yes)); }")


def test_annotation_slots_are_not_interchangeable() -> None:
    err = parse_error("message m { required binary s (UTF8); }")
    assert err.expected == "logical type"
    err = parse_error("message m { required group g (STRING) {} }")
    assert err.expected == "converted type"


def test_unknown_keywords_are_rejected() -> None:
    parse_error("message m { sometimes int32 a; }")
    parse_error("message m { required int128 a; }")
    parse_error("message m { required int32 a (FOO); }")
    parse_error("schema m { }")


def test_keywords_are_case_sensitive() -> None:
    parse_error("MESSAGE m { }")
    parse_error("message m { REQUIRED int32 a; }")
    parse_error("message m { required INT32 a; }")
    parse_error("message m { required binary a (string); }")


def test_missing_semicolon() -> None:
    err = parse_error("message m { required int32 a }")
    assert err.expected == "';'"
    assert err.token.type == "RBRACE"


def test_groups_take_no_semicolon() -> None:
    parse_error("message m { required group g {}; }")


def test_unterminated_message_reports_end_of_input() -> None:
    err = parse_error("message m { required int32 a;")
    assert err.token.type == "EOF"
    assert "end of input" in str(err)


def test_trailing_tokens_are_rejected() -> None:
    err = parse_error("message m { } message n { }")
    assert err.token.value == "message"


def test_empty_token_list() -> None:
    with pytest.raises(SchemaParseError):
        Parser([]).parse()


def test_parse_error_is_a_syntax_error() -> None:
    with pytest.raises(SyntaxError):
        parse("message { }")
