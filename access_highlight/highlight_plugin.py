"""
Highlight Plugin for Access IRC

Adds the /highlight command for managing the highlight list:

    /highlight [list]        Print the current highlight list
    /highlight add <phrase>  Add a phrase (stored lower-cased)
    /highlight del <phrase>  Remove a phrase
"""

from .highlight import HighlightEditor
from .plugin_specs import hookimpl

COMMAND_NAME = "highlight"

COMMAND_INFO = {
    "description": "Access the highlight list",
    "args": "[list | add <phrase> | del <phrase>]",
    "help": (
        "  list: lists highlight phrases\n"
        "  add: adds a new phrase\n"
        "  del: removes a phrase\n\n"
        "If no command is given, all phrases are listed."
    ),
    "completion": "add || del || list",
}


class Plugin:
    """Highlight list management commands"""

    def _editor(self, ctx, server="", target=""):
        return HighlightEditor(
            ctx,
            lambda message: ctx.add_system_message(server, target, message)
        )

    @hookimpl
    def on_startup(self, ctx):
        ctx.add_system_message(
            "", "",
            "Highlight plugin loaded. Use /highlight add <phrase> to add phrases."
        )

    @hookimpl
    def on_command(self, ctx, server, target, command, args):
        """Handle /highlight commands"""
        if command.lower() != COMMAND_NAME:
            return None

        self._editor(ctx, server, target).dispatch(args)
        return True

    @hookimpl
    def on_complete(self, ctx, command, args):
        if command.lower() != COMMAND_NAME:
            return None
        return self._editor(ctx).complete(args)

    @hookimpl
    def describe_commands(self, ctx):
        return {COMMAND_NAME: dict(COMMAND_INFO)}
