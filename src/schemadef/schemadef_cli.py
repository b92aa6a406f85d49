"""
Schema definition CLI entrypoint.

This module provides the command-line interface for checking and normalizing
parquet schema definition documents.

Features:
    - Read a schema from a file or an inline string.
    - Print the canonical rendering, or write it to a file.
    - Validate only, without output.
    - Dump the storage format record of a nested column as JSON.
    - Dump the flattened record list as JSON.

Example usage:
    schemadef schema.txt
    schemadef -s "message m { required int32 a; }"
    schemadef schema.txt --check
    schemadef schema.txt --element g.item
    schemadef schema.txt --flat -o schema.json

Functions:
    run_schemadef(source: str, is_string: bool = False, out: str | None = None,
                  check: bool = False, element: str | None = None, flat: bool = False) -> int:
        Executes the pipeline (parse → render/inspect → output) and returns an exit code.

    main() -> None:
        Parses CLI arguments and exits with the pipeline's status.
"""

import argparse
import json
import sys

from schemadef.schemadef_definition import SchemaDefinition, parse_schema_definition

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_NOT_FOUND = 2


def resolve_path(definition: SchemaDefinition, path: str) -> SchemaDefinition | None:
    """Follow a dotted column path (`g.item`) through nested sub-schemas."""
    current: SchemaDefinition | None = definition
    for name in path.split("."):
        if current is None:
            return None
        current = current.sub_schema(name)
    return current


def run_schemadef(
    source: str,
    is_string: bool = False,
    out: str | None = None,
    check: bool = False,
    element: str | None = None,
    flat: bool = False,
) -> int:
    """
    Parse a schema definition and emit the requested view of it.

    Args:
        source (str): The schema text, or a path to a file containing it.
        is_string (bool): If True, treats `source` as schema text. Defaults to False.
        out (str | None): Optional path to write output to instead of stdout.
        check (bool): If True, only validate; nothing is printed on success.
        element (str | None): Dotted path of a column whose record is dumped as JSON.
        flat (bool): If True, dump the flattened record list as JSON.

    Returns:
        int: 0 on success, 1 if the schema does not parse, 2 if `element` is not found.

    Side Effects:
        - May write output to a file.
        - Prints results to stdout and errors to stderr.
    """
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    try:
        definition = parse_schema_definition(source)
    except SyntaxError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    if check:
        return EXIT_OK

    if element:
        target = resolve_path(definition, element)
        record = target.schema_element() if target is not None else None
        if record is None:
            print(f"error: no column {element!r}", file=sys.stderr)
            return EXIT_NOT_FOUND
        text = json.dumps(record.to_dict(), indent=2) + "\n"
    elif flat:
        text = json.dumps([e.to_dict() for e in definition.elements()], indent=2) + "\n"
    else:
        text = definition.render()

    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text)
    else:
        sys.stdout.write(text)
    return EXIT_OK


def main() -> None:
    """
    Entry point for the schemadef CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as schema text instead of a file path.
        - `-o`, `--out`: Write output to a file.
        - `--check`: Validate only.
        - `--element PATH`: Dump the record of the column at a dotted path.
        - `--flat`: Dump the flattened record list.
    """
    parser = argparse.ArgumentParser(prog="schemadef")
    parser.add_argument("source", help="Filename or raw schema text (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal schema text"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "--check", action="store_true", help="Only validate the schema"
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--element",
        metavar="PATH",
        help="Print the JSON record of the column at a dotted path (e.g. g.item)",
    )
    mode.add_argument(
        "--flat", action="store_true", help="Print the flattened JSON record list"
    )

    args = parser.parse_args()

    sys.exit(
        run_schemadef(
            source=args.source,
            is_string=args.string,
            out=args.out,
            check=args.check,
            element=args.element,
            flat=args.flat,
        )
    )


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
