"""
Terminal front end for the factorizer.

    $ factor 12 100
    12 = 2 × 2 × 3
    12 = 2^2 × 3
    ...

Run without numbers for an interactive session that keeps a history of
successful factorizations:

    > 360
    > history
    > re 1      recalculate entry 1 (not added again)
    > del 1     remove entry 1
"""
import argparse
import logging
import sys

from factorization import (
    AboveMaximumError,
    BelowMinimumError,
    Factorization,
    InputError,
    NotANumberError,
    analyze,
)
from history import SEPARATOR, HistoryRecord, HistoryStore

logger = logging.getLogger(__name__)

MESSAGES = {
    NotANumberError.reason: "Please enter a valid number.",
    BelowMinimumError.reason: "Please enter an integer of 2 or more.",
    AboveMaximumError.reason: "The number is too large.",
}

HELP = """\
commands:
  <number>    factorize and add to history
  history, h  list history
  re N        recalculate history entry N
  del N       remove history entry N
  help        show this message
  quit, exit  leave"""


def message_for(exc: InputError) -> str:
    return MESSAGES.get(exc.reason, str(exc))


class FactorSession:
    """Current result, last error and history of one interactive session."""

    def __init__(self, history: HistoryStore | None = None, separator: str = SEPARATOR):
        self.history = history if history is not None else HistoryStore()
        self.separator = separator
        self.current: Factorization | None = None
        self.error: str | None = None

    def submit(self, text) -> Factorization:
        """
        Factorize user input and record it in history.

        On invalid input the current result is cleared, ``error`` holds the
        user-facing message and the InputError propagates.
        """
        try:
            result = analyze(text)
        except InputError as exc:
            self.current = None
            self.error = message_for(exc)
            logger.info("rejected %r: %s", text, exc.reason)
            raise
        self.current = result
        self.error = None
        self.history.add(result, self.separator)
        return result

    def recalculate(self, index: int) -> Factorization:
        record = self.history[index]
        result = analyze(record.number)
        self.current = result
        self.error = None
        return result

    def remove(self, index: int) -> HistoryRecord:
        return self.history.remove_at(index)

    def render(self, result: Factorization) -> str:
        return result.render(self.separator)

    def render_history(self) -> str:
        records = self.history.list()
        if not records:
            return "(history is empty)"
        return "\n".join(
            f"{i:>3}. {r.number} = {r.factorization}" for i, r in enumerate(records, 1)
        )


def _position(arg: str) -> int:
    """Convert a 1-based position typed by the user into an index."""
    try:
        return int(arg) - 1
    except ValueError:
        raise IndexError(f"not a history position: {arg!r}") from None


def handle_line(session: FactorSession, line: str, out) -> bool:
    """Process one input line. Returns False when the session should end."""
    words = line.split()
    if not words:
        return True
    command, args = words[0].lower(), words[1:]

    if command in ("quit", "exit"):
        return False
    if command == "help":
        print(HELP, file=out)
    elif command in ("history", "h"):
        print(session.render_history(), file=out)
    elif command in ("re", "del"):
        if len(args) != 1:
            print(f"usage: {command} N", file=out)
            return True
        try:
            index = _position(args[0])
            if command == "re":
                print(session.render(session.recalculate(index)), file=out)
            else:
                record = session.remove(index)
                print(f"removed {record.number} = {record.factorization}", file=out)
        except IndexError as exc:
            print(f"error: {exc}", file=out)
    else:
        try:
            result = session.submit(line)
        except InputError:
            print(session.error, file=out)
        else:
            print(session.render(result), file=out)
    return True


def run_interactive(session: FactorSession, stdin=None, stdout=None) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    prompt = "> " if stdin.isatty() else ""
    while True:
        if prompt:
            print(prompt, end="", file=stdout, flush=True)
        line = stdin.readline()
        if not line:
            break
        if not handle_line(session, line, stdout):
            break
    logger.debug("session ended with %d history entries", len(session.history))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="factor",
        description="Prime factorization by trial division, with session history.",
    )
    parser.add_argument("numbers", nargs="*",
                        help="numbers to factorize; omit for an interactive session")
    parser.add_argument("--separator", default=SEPARATOR,
                        help="string placed between factors (default: %(default)r)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="logging level (default: %(default)s)")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    session = FactorSession(separator=args.separator)

    if not args.numbers:
        return run_interactive(session)

    status = 0
    for text in args.numbers:
        try:
            result = session.submit(text)
        except InputError:
            print(f"{text}: {session.error}", file=sys.stderr)
            status = 1
        else:
            print(session.render(result))
    return status


if __name__ == "__main__":
    sys.exit(main())
