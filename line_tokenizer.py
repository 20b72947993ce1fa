# line_tokenizer.py - splits one prompt line into argument lists and dispatches them
from __future__ import annotations

import enum
import sys
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence, TextIO, Union

SEPARATOR = ";"
ESCAPE = "\\"
COMMENT = "#"
SINGLE_QUOTE = "'"
DOUBLE_QUOTE = '"'
QUOTES = (SINGLE_QUOTE, DOUBLE_QUOTE)
ESCAPABLE = frozenset((COMMENT, SEPARATOR, ESCAPE, SINGLE_QUOTE, DOUBLE_QUOTE))

# exit status of the whole process when the parser loses track of its state
FATAL_EXIT = 128


class TokenizerStateError(RuntimeError):
    """The parser reached a state (or quote continuation) it has no transition for."""


class Mode(enum.Enum):
    NORMAL = "normal"
    COMMENT = "comment"
    AFTER_SEPARATOR = "after-separator"


@dataclass(frozen=True)
class Quoted:
    """Inside a quote; `resume` is where control goes once the quote closes."""
    quote: str
    resume: Mode


@dataclass(frozen=True)
class Escaped:
    """One character after a backslash; `within` is the state to return to."""
    within: Union[Mode, Quoted]


State = Union[Mode, Quoted, Escaped]


class ParseContext:
    """Mutable parse state for a single line. Never shared between lines."""

    def __init__(self):
        self.state: State = Mode.NORMAL
        self.current = ""
        self.quoted = ""
        self.args: List[str] = []

    def flush(self):
        if self.current:
            self.args.append(self.current)
        self.current = ""

    def take(self) -> List[str]:
        args, self.args = self.args, []
        return args

    def open_quote(self, quote: str, resume: Mode):
        self.quoted = ""
        self.state = Quoted(quote, resume)


# -----------------------
# Transitions
# -----------------------
def _normal(ctx: ParseContext, ch: str) -> bool:
    if ch == COMMENT:
        ctx.flush()
        ctx.state = Mode.COMMENT
    elif ch == SEPARATOR:
        ctx.flush()
        ctx.state = Mode.AFTER_SEPARATOR
        return True
    elif ch == ESCAPE:
        ctx.state = Escaped(Mode.NORMAL)
    elif ch in QUOTES:
        ctx.open_quote(ch, Mode.NORMAL)
    elif ch == " ":
        ctx.flush()
    else:
        ctx.current += ch
    return False


def _comment(ctx: ParseContext, ch: str) -> bool:
    # comment text is never accumulated, so there is nothing to flush here
    if ch == SEPARATOR:
        ctx.state = Mode.AFTER_SEPARATOR
        return True
    if ch == ESCAPE:
        ctx.state = Escaped(Mode.COMMENT)
    elif ch in QUOTES:
        ctx.open_quote(ch, Mode.COMMENT)
    return False


def _after_separator(ctx: ParseContext, ch: str) -> bool:
    if ch == " " or ch == SEPARATOR:
        pass
    elif ch == COMMENT:
        ctx.current = ""
        ctx.state = Mode.COMMENT
    elif ch == ESCAPE:
        ctx.state = Escaped(Mode.NORMAL)
    elif ch in QUOTES:
        ctx.open_quote(ch, Mode.NORMAL)
    else:
        ctx.current = ch
        ctx.state = Mode.NORMAL
    return False


def _close_quote(ctx: ParseContext, state: Quoted):
    if state.resume is Mode.NORMAL:
        ctx.current += ctx.quoted
    elif state.resume is not Mode.COMMENT:
        raise TokenizerStateError(f"unknown quote continuation: {state.resume!r}")
    ctx.quoted = ""
    ctx.state = state.resume


def _quoted(ctx: ParseContext, state: Quoted, ch: str) -> bool:
    if ch == ESCAPE:
        ctx.state = Escaped(state)
    elif ch == state.quote:
        _close_quote(ctx, state)
    else:
        ctx.quoted += ch
    return False


def _escaped(ctx: ParseContext, state: Escaped, ch: str) -> bool:
    # a failed escape keeps the backslash too
    text = ch if ch in ESCAPABLE else ESCAPE + ch
    within = state.within
    if within is Mode.NORMAL:
        ctx.current += text
    elif within is Mode.COMMENT:
        pass
    elif isinstance(within, Quoted):
        ctx.quoted += text
    else:
        raise TokenizerStateError(f"unknown parser state: {state!r}")
    ctx.state = within
    return False


def advance(ctx: ParseContext, ch: str) -> bool:
    """Feed one character. Returns True when the argument list should be dispatched."""
    state = ctx.state
    if state is Mode.NORMAL:
        return _normal(ctx, ch)
    if state is Mode.COMMENT:
        return _comment(ctx, ch)
    if state is Mode.AFTER_SEPARATOR:
        return _after_separator(ctx, ch)
    if isinstance(state, Quoted):
        return _quoted(ctx, state, ch)
    if isinstance(state, Escaped):
        return _escaped(ctx, state, ch)
    raise TokenizerStateError(f"unknown parser state: {state!r}")


def iter_commands(line: str) -> Iterator[List[str]]:
    """Yield every non-empty argument list found in `line`, left to right.

    Anything still inside an unterminated quote, or a dangling backslash,
    at the end of the line is dropped.
    """
    ctx = ParseContext()
    for ch in line:
        if advance(ctx, ch) and ctx.args:
            yield ctx.take()
    ctx.flush()
    if ctx.args:
        yield ctx.take()


# -----------------------
# Dispatcher
# -----------------------
Executor = Callable[[Sequence[str], Sequence[str]], int]


class Tokenizer:
    def __init__(self, prefix: Sequence[str], execute: Executor,
                 out: Optional[TextIO] = None, rule: str = ""):
        self.prefix = list(prefix)
        self.execute = execute
        self.out = out
        self.rule = rule

    def dispatch(self, args: List[str]) -> int:
        code = self.execute(self.prefix, args)
        print(self.rule, file=self.out or sys.stdout, flush=True)
        return code

    def run(self, line: str) -> bool:
        """Run every sub-command of `line`; True if any of them exited nonzero."""
        failed = False
        for args in iter_commands(line):
            if self.dispatch(args) > 0:
                failed = True
        return failed
