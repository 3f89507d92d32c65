#!/usr/bin/env python3
"""
Schema export script.
Prints the executable GraphQL schema as SDL, or compares it with a committed
copy so client code generation never drifts from the server.
"""
import argparse
import sys
from pathlib import Path

from graphql import print_schema

from tourhub.gql import schema


def main():
    """Write or check the SDL snapshot."""
    parser = argparse.ArgumentParser(description="Export the favorites GraphQL schema")
    parser.add_argument("--output", help="Write SDL to this file instead of stdout")
    parser.add_argument("--check", help="Fail if this SDL file differs from the live schema")
    args = parser.parse_args()

    sdl = print_schema(schema) + "\n"

    if args.check:
        snapshot = Path(args.check)
        if not snapshot.exists():
            print(f"❌ Schema snapshot not found at {snapshot}")
            sys.exit(1)
        if snapshot.read_text(encoding="utf-8") != sdl:
            print(f"❌ {snapshot} is out of date, rerun with --output {snapshot}")
            sys.exit(1)
        print(f"✅ {snapshot} matches the live schema")
        return

    if args.output:
        Path(args.output).write_text(sdl, encoding="utf-8")
        print(f"✓ Schema written to {args.output}")
        return

    sys.stdout.write(sdl)


if __name__ == "__main__":
    main()
