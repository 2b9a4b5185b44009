# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Mirrowel

"""
Command line front-end: paste credentials on stdin (or pass a file) and get the
kiro-auth-token.json record, the BuilderId registration file and the usage.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel

from kiro_token_library import KiroTokenError, KiroTokenPipeline, ProcessResult

console = Console()
error_console = Console(stderr=True)


def _read_input(path: Optional[str]) -> str:
    if path and path != "-":
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()


async def _run(text: str) -> ProcessResult:
    async with KiroTokenPipeline() as pipeline:
        return await pipeline.process(text)


def _print_result(result: ProcessResult) -> None:
    payload = result.to_dict()
    console.print(
        Panel(
            JSON.from_data(payload["kiroToken"]),
            title="kiro-auth-token.json",
            border_style="green",
        )
    )
    if result.client_id_hash_file:
        console.print(
            Panel(
                JSON.from_data(result.client_id_hash_file.content),
                title=result.client_id_hash_file.filename,
                border_style="cyan",
            )
        )
    console.print(Panel(JSON.from_data(payload["usage"]), title="Usage", border_style="blue"))


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="kiro-token-tools",
        description="Refresh pasted Kiro credentials and show the account usage.",
    )
    parser.add_argument("file", nargs="?", help="File holding the pasted credentials (default: stdin)")
    parser.add_argument("--raw", action="store_true", help="Print the result as plain JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    load_dotenv()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    text = _read_input(args.file)
    try:
        result = asyncio.run(_run(text))
    except KiroTokenError as e:
        error_console.print(f"[bold red]Error:[/bold red] {e.message}")
        return 1

    if args.raw:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_result(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
