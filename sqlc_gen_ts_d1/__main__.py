#!/usr/bin/env python3
"""
Command line for the sqlc-gen-ts-d1 plugin.

Usage:
    python -m sqlc_gen_ts_d1 <command> [options]

Commands:
    plugin      Run as a sqlc process plugin (JSON on stdin and stdout)
    render      Generate files from a request fixture into a directory

Examples:
    python -m sqlc_gen_ts_d1 plugin
    python -m sqlc_gen_ts_d1 render request.yaml --out src/gen/sqlc
    python -m sqlc_gen_ts_d1 render request.json --options '{"workers-types-v3": "1"}'
"""

from __future__ import annotations

import sys


def cmd_plugin(args: list[str]) -> int:
    """Serve one sqlc code generation request."""
    from sqlc_gen_ts_d1.d1_codegen import main as codegen
    try:
        codegen.run_plugin(args)
        return 0
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1


def cmd_render(args: list[str]) -> int:
    """Render a request fixture to files."""
    from sqlc_gen_ts_d1.d1_codegen import main as codegen
    try:
        codegen.main(args)
        return 0
    except SystemExit as e:
        if isinstance(e.code, str):
            print(e.code, file=sys.stderr)
        return e.code if isinstance(e.code, int) else 1


COMMANDS = {
    "plugin": (cmd_plugin, "Run as a sqlc process plugin"),
    "render": (cmd_render, "Generate files from a request fixture"),
}


def main() -> int:
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        print(__doc__)
        print("Available commands:")
        for name, (_, desc) in COMMANDS.items():
            print(f"  {name:12} {desc}")
        print("\nUse '<command> --help' for command-specific options.")
        return 0

    command = sys.argv[1]
    args = sys.argv[2:]

    if command not in COMMANDS:
        print(f"Unknown command: {command}", file=sys.stderr)
        print(f"Available commands: {', '.join(COMMANDS.keys())}", file=sys.stderr)
        return 1

    handler, _ = COMMANDS[command]
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
