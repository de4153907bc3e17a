import logging

from recallsh.errors import RecallError
from recallsh.parser import BANG, CommandLine

logger = logging.getLogger(__name__)


def parse_reference(line):
    """
    Work out which history entry a recall line refers to.
    Returns: ordinal (int), or None for '!!'
    Raises RecallError for anything that is not '!!' or '!<n>'
    """
    argv = line.argv
    if len(argv) != 2 or argv[0] != BANG:
        raise RecallError(BANG + " ".join(argv[1:]), "invalid recall")

    arg = argv[1]
    if arg == BANG:
        return None
    if not arg.isdecimal() or int(arg) == 0:
        raise RecallError(BANG + arg, "invalid recall")
    return int(arg)


def resolve(line, log, terminal):
    """
    Expand a recall line against the history.
    The resolved text is echoed, recorded as a new entry and returned as a
    fresh CommandLine. The result is never expanded again, so a stored line
    that starts with '!' runs as a plain command.
    """
    ordinal = parse_reference(line)
    if ordinal is None:
        entry = log.last()
        reference = "!!"
    else:
        entry = log.lookup(ordinal)
        reference = f"!{ordinal}"

    if entry is None:
        raise RecallError(reference)

    logger.debug("%s resolved to entry %d: %r", reference, entry.ordinal, entry.text)
    resolved = CommandLine(entry.text)
    # "!! &" sends the recalled command to the background
    if line.background:
        resolved.background = True
    terminal.write(resolved.text + "\n")
    log.record(resolved.text)
    return resolved
