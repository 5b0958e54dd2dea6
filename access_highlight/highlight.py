"""
Highlight list editor for Access IRC

Keeps the highlight phrases as a comma-separated string in the host
configuration and provides the list/add/del operations behind /highlight.
"""

from enum import Enum
from typing import Any, Callable, Iterable, List, NamedTuple

# Config option holding the highlight phrases
HIGHLIGHT_OPTION = "look.highlight"
DELIMITER = ","

USAGE_LINES = [
    "Highlight usage:",
    " /highlight [list][add <phrase>][del <phrase>]",
    " where <phrase> is the case-insensitive phrase you want to add to the highlight list.",
]


class Action(Enum):
    """Actions understood by /highlight"""

    LIST = "list"
    ADD = "add"
    DEL = "del"
    UNKNOWN = "unknown"


class Command(NamedTuple):
    """A parsed /highlight command line"""

    action: Action
    argument: str = ""
    word: str = ""


def split_phrases(value: str, delimiter: str = DELIMITER) -> List[str]:
    """
    Split a stored highlight string into phrases

    Empty fields are dropped, so an empty string gives an empty list.
    A value that is not a string (a hand-edited config) reads as empty.

    Args:
        value: Stored option value
        delimiter: Separator between phrases

    Returns:
        List of phrases in stored order
    """
    if not isinstance(value, str) or not value:
        return []
    return [phrase for phrase in value.split(delimiter) if phrase]


def join_phrases(phrases: Iterable[str], delimiter: str = DELIMITER) -> str:
    """Join phrases back into the stored string form"""
    return delimiter.join(phrases)


def contains_phrase(phrases: Iterable[str], phrase: str) -> bool:
    """Check whether phrase is in phrases, ignoring case"""
    wanted = phrase.lower()
    return any(existing.lower() == wanted for existing in phrases)


def parse_command(args: str) -> Command:
    """
    Parse the arguments typed after /highlight

    The first word picks the action (case-insensitive), the rest of the
    line is the argument. No word at all means list.

    Args:
        args: Raw argument string

    Returns:
        Parsed command
    """
    parts = args.split(None, 1) if args else []
    if not parts:
        return Command(Action.LIST)

    word = parts[0].lower()
    argument = parts[1].strip() if len(parts) > 1 else ""

    try:
        action = Action(word)
    except ValueError:
        action = Action.UNKNOWN

    return Command(action, argument, word)


class HighlightEditor:
    """
    Read-modify-write editor for the highlight list

    The store is any object with get_option(key, default) and
    set_option(key, value), such as ConfigManager or PluginContext.
    Every operation re-reads the list; nothing is cached between calls.
    """

    def __init__(self, store: Any, output: Callable[[str], None],
                 key: str = HIGHLIGHT_OPTION):
        """
        Initialize editor

        Args:
            store: Configuration store holding the list
            output: Callable receiving each user-visible message
            key: Option key of the highlight list
        """
        self.store = store
        self.output = output
        self.key = key

    def get_phrases(self) -> List[str]:
        """Read the current phrases from the store"""
        value = self.store.get_option(self.key, "")
        return split_phrases(value)

    def _save_phrases(self, phrases: List[str]) -> bool:
        if self.store.set_option(self.key, join_phrases(phrases)):
            return True
        self.output("ERROR - could not save the highlights list.")
        return False

    def list_phrases(self) -> List[str]:
        """
        Print the highlight list

        Returns:
            The phrases that were printed
        """
        phrases = self.get_phrases()
        if not phrases:
            self.output("Highlights list is empty.")
        else:
            self.output("Current highlights:")
            for phrase in phrases:
                self.output(f"  {phrase}")
        return phrases

    def add_phrase(self, phrase: str) -> bool:
        """
        Add a phrase to the highlight list (lower-cased)

        Args:
            phrase: Phrase to add

        Returns:
            True if the list was changed
        """
        phrase = (phrase or "").strip()
        if not phrase:
            self.output("ERROR - you must provide a phrase to be added.")
            return False

        if DELIMITER in phrase:
            self.output(f"ERROR - phrase '{phrase}' may not contain '{DELIMITER}'.")
            return False

        phrase = phrase.lower()
        phrases = self.get_phrases()
        if contains_phrase(phrases, phrase):
            self.output(f"Phrase '{phrase}' is already in the highlights list.")
            return False

        phrases.append(phrase)
        if not self._save_phrases(phrases):
            return False
        self.output(f"'{phrase}' added to highlights list.")
        return True

    def del_phrase(self, phrase: str) -> bool:
        """
        Remove a phrase from the highlight list

        Only the first case-insensitive match is removed.

        Args:
            phrase: Phrase to remove

        Returns:
            True if the list was changed
        """
        phrase = (phrase or "").strip()
        if not phrase:
            self.output("ERROR - you must provide a phrase to be removed.")
            return False

        phrase = phrase.lower()
        phrases = self.get_phrases()
        for index, existing in enumerate(phrases):
            if existing.lower() == phrase:
                del phrases[index]
                if not self._save_phrases(phrases):
                    return False
                self.output(f"Phrase '{phrase}' removed from the highlights list.")
                return True

        self.output(f"Phrase '{phrase}' is not in the highlights list.")
        return False

    def print_usage(self) -> None:
        """Print the /highlight usage text"""
        for line in USAGE_LINES:
            self.output(line)

    def dispatch(self, args: str) -> Command:
        """
        Run the command typed after /highlight

        Args:
            args: Raw argument string

        Returns:
            The parsed command that was executed
        """
        command = parse_command(args)

        if command.action is Action.LIST:
            self.list_phrases()
        elif command.action is Action.ADD:
            self.add_phrase(command.argument)
        elif command.action is Action.DEL:
            self.del_phrase(command.argument)
        else:
            self.print_usage()

        return command

    def complete(self, args: str) -> List[str]:
        """
        Completion candidates for a partially typed /highlight command

        Args:
            args: Argument text typed so far

        Returns:
            Matching action words, or stored phrases after "del "
        """
        args = args or ""
        parts = args.split(None, 1)

        # Still typing the action word
        if not parts or (len(parts) == 1 and not args[-1].isspace()):
            prefix = parts[0].lower() if parts else ""
            return [action.value for action in (Action.ADD, Action.DEL, Action.LIST)
                    if action.value.startswith(prefix)]

        if parts[0].lower() != Action.DEL.value:
            return []

        prefix = parts[1].lower() if len(parts) > 1 else ""
        return [phrase for phrase in self.get_phrases()
                if phrase.lower().startswith(prefix)]
