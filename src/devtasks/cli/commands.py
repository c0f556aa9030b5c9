# src/devtasks/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable

from ..core.state import AppState
from ..tasks.errors import ValidationError
from ..tasks.task_editor import EDITABLE_FIELDS, EditorMode
from ..tasks.task_filter import FilterCriteria
from .render import render_board, render_criteria, render_editor

CommandHandler = Callable[[AppState, list[str]], str | Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /board, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Handlers may be plain functions or coroutines.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            result = handler(state, args)
            if inspect.isawaitable(result):
                result = await result
        except ValidationError as exc:
            return str(exc)
        return result

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_board(state: AppState, args: list[str]) -> str:
    out = render_board(state.board.view(), loading=state.board.loading)
    if state.board.load_error:
        out += f"\n\n! Last reload failed: {state.board.load_error}"
    return out


async def cmd_reload(state: AppState, args: list[str]) -> str:
    if not await state.board.reload():
        return f"Failed to load tasks: {state.board.load_error}"
    return cmd_board(state, args)


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter                      -> show current filters
    /filter status <ALL|...>     -> filter by status
    /filter priority <ALL|...>   -> filter by priority
    /filter search <text...>     -> search title + description (empty clears)
    /filter clear                -> reset everything
    """
    board = state.board
    if not args:
        return render_criteria(board.criteria)

    sub = args[0].lower()
    current = board.criteria

    if sub == "clear":
        board.set_criteria(FilterCriteria())
    elif sub == "status" and len(args) == 2:
        board.set_criteria(
            FilterCriteria.parse(status=args[1], priority=current.priority, search_text=current.search_text)
        )
    elif sub == "priority" and len(args) == 2:
        board.set_criteria(
            FilterCriteria.parse(status=current.status, priority=args[1], search_text=current.search_text)
        )
    elif sub == "search":
        board.set_criteria(
            FilterCriteria.parse(
                status=current.status, priority=current.priority, search_text=" ".join(args[1:])
            )
        )
    else:
        return (
            "Usage:\n"
            "  /filter status <ALL|BACKLOG|IN_PROGRESS|DONE>\n"
            "  /filter priority <ALL|LOW|MEDIUM|HIGH>\n"
            "  /filter search <text>\n"
            "  /filter clear"
        )

    return cmd_board(state, [])


def cmd_new(state: AppState, args: list[str]) -> str:
    state.editor.open(EditorMode.CREATE)
    if args:
        state.editor.set_field("title", " ".join(args))
    return render_editor(state.editor)


def cmd_edit(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /edit <task id or unique id prefix>"
    task = state.board.find(args[0])
    if task is None:
        return f"No single task matches id {args[0]!r}."
    state.editor.open(EditorMode.EDIT, task)
    return render_editor(state.editor)


def cmd_set(state: AppState, args: list[str]) -> str:
    if not state.editor.is_open:
        return "No task is being edited. Use /new or /edit <id>."
    if not args:
        return f"Usage: /set <{'|'.join(EDITABLE_FIELDS)}> <value...>"
    state.editor.set_field(args[0].lower(), " ".join(args[1:]))
    return render_editor(state.editor)


def cmd_form(state: AppState, args: list[str]) -> str:
    return render_editor(state.editor)


async def cmd_save(state: AppState, args: list[str]) -> str:
    if not state.editor.is_open:
        return "No task is being edited. Use /new or /edit <id>."
    saved = await state.board.submit_editor(state.editor)
    if saved is None:
        return render_editor(state.editor)
    return f"Saved [{saved.id[:8]}] {saved.title}\n\n" + cmd_board(state, [])


def cmd_cancel(state: AppState, args: list[str]) -> str:
    if not state.editor.is_open:
        return "Nothing to cancel."
    state.editor.close()
    return "Discarded changes."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("board", cmd_board, help_text="Show the board columns.", aliases=["b", "ls"])
registry.register("reload", cmd_reload, help_text="Reload tasks from the store.")
registry.register(
    "filter",
    cmd_filter,
    help_text="Filters: /filter status X | priority X | search text | clear.",
    aliases=["f"],
)
registry.register("new", cmd_new, help_text="Open the editor for a new task: /new [title].")
registry.register("edit", cmd_edit, help_text="Open the editor for a task: /edit <id>.")
registry.register("set", cmd_set, help_text="Set an editor field: /set <field> <value>.")
registry.register("form", cmd_form, help_text="Show the editor form.")
registry.register("save", cmd_save, help_text="Save the task being edited.")
registry.register("cancel", cmd_cancel, help_text="Close the editor without saving.")
