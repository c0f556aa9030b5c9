# tests/test_console.py

from __future__ import annotations

import pytest

from devtasks.connectors.console_connector import run_console_loop


def _scripted(lines: list[str]):
    it = iter(lines)

    def read_line(prompt: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read_line


@pytest.mark.asyncio
async def test_console_runs_commands_until_exit(state, repo) -> None:
    out: list[str] = []

    await run_console_loop(
        state,
        read_line=_scripted(["", "hello", "/new Console task", "/save", "/exit", "/board"]),
        write=out.append,
    )

    assert any("Commands start with '/'" in line for line in out)
    assert any(line.startswith("Saved [new-1] Console task") for line in out)
    # Nothing after /exit is processed.
    assert len(repo.calls) == 1


@pytest.mark.asyncio
async def test_console_stops_on_eof(state) -> None:
    out: list[str] = []
    await run_console_loop(state, read_line=_scripted(["/help"]), write=out.append)
    assert any("Available commands:" in line for line in out)
