from typing import NamedTuple

from recallsh.config import COMMAND_LENGTH

DELIMITERS = " \t\n\r"
BANG = "!"
BACKGROUND_MARKER = "&"


class Token(NamedTuple):
    """A span [start, end) of the line a token was cut from"""
    start: int
    end: int


def tokenize(text):
    """
    Split a command line into token spans.
    Whitespace closes the current token. '!' is always a token of its own,
    so '!!' gives two tokens and '!3' gives '!' then '3'.
    Returns: list of Token, empty for blank input
    """
    tokens = []
    start = None

    for i, ch in enumerate(text):
        if ch in DELIMITERS:
            if start is not None:
                tokens.append(Token(start, i))
                start = None
        elif ch == BANG:
            if start is not None:
                tokens.append(Token(start, i))
                start = None
            tokens.append(Token(i, i + 1))
        elif start is None:
            start = i

    if start is not None:
        tokens.append(Token(start, len(text)))
    return tokens


class CommandLine:
    """
    One line of user input together with the tokens cut from it.
    The trailing '&' marker is stripped on construction and remembered
    in `background`.
    """

    def __init__(self, raw):
        self._raw = raw[:COMMAND_LENGTH - 1]
        self._tokens = tokenize(self._raw)
        self.background = False

        if self._tokens and self._word(self._tokens[-1]) == BACKGROUND_MARKER:
            self.background = True
            self._tokens.pop()

    def _word(self, token):
        return self._raw[token.start:token.end]

    @property
    def argv(self):
        return [self._word(t) for t in self._tokens]

    @property
    def command(self):
        return self._word(self._tokens[0]) if self._tokens else None

    @property
    def is_recall(self):
        return self.command == BANG

    @property
    def text(self):
        """Canonical form of the line, as it is stored in the history"""
        words = self.argv
        if self.background:
            words.append(BACKGROUND_MARKER)
        return " ".join(words)

    def __len__(self):
        return len(self._tokens)

    def __bool__(self):
        return bool(self._tokens)

    def __repr__(self):
        return f"CommandLine({self.text!r})"
