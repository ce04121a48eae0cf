#!/usr/bin/env python
# Copyright 2019-present Kensho Technologies, LLC.
"""Utility modeled after json.tool, builds the schema read from stdin and outputs it to stdout.

Used as: python -m graphql_schema_builder.tool
"""
import sys

from . import build_schema_ast, default_directive_registry


def main() -> None:
    """Read a schema from standard input, and output the built schema to standard output."""
    schema_string = sys.stdin.read()

    document = build_schema_ast(schema_string, default_directive_registry())
    sys.stdout.write(document.print())
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
