"""
Plugin hook specifications for Access IRC

This module defines the hooks that plugins can implement.
Plugins can hook into application lifecycle, commands and completion.
"""

import pluggy

# Project name for pluggy (shared with Access IRC plugins)
hookspec = pluggy.HookspecMarker("access_irc")
hookimpl = pluggy.HookimplMarker("access_irc")


class AccessIRCHookSpec:
    """Hook specifications for Access IRC plugins"""

    # =========================================================================
    # Lifecycle Hooks
    # =========================================================================

    @hookspec
    def on_startup(self, ctx):
        """Called when the application starts.

        Args:
            ctx: Plugin context object with access to application APIs
        """

    @hookspec
    def on_shutdown(self, ctx):
        """Called when the application is shutting down.

        Args:
            ctx: Plugin context object with access to application APIs
        """

    # =========================================================================
    # Command Hooks
    # =========================================================================

    @hookspec(firstresult=True)
    def on_command(self, ctx, server, target, command, args):
        """Handle custom commands.

        Plugins can register their own /commands by implementing this hook.
        Return True if the command was handled, None/False to pass to next handler.

        Args:
            ctx: Plugin context object
            server: Current server name
            target: Current channel or PM target
            command: Command name (without leading /)
            args: Command arguments string

        Returns:
            True if command was handled, None/False otherwise
        """

    @hookspec(firstresult=True)
    def on_complete(self, ctx, command, args):
        """Offer completions for a partially typed command.

        Args:
            ctx: Plugin context object
            command: Command name (without leading /)
            args: Argument text typed so far

        Returns:
            List of candidate strings, or None if the command isn't ours
        """

    @hookspec
    def describe_commands(self, ctx):
        """Describe the commands a plugin provides.

        Args:
            ctx: Plugin context object

        Returns:
            dict mapping command name to a dict with 'description', 'args',
            'help' and 'completion' keys
        """
