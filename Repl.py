#!/usr/bin/env python3
# Repl.py - prompt for trailing arguments and run the fixed command prefix with them
import glob
import os
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.completion import Completer, Completion

import argparser
import external_runner
import Interrupt
from line_tokenizer import FATAL_EXIT, Tokenizer, TokenizerStateError
from logfiles import SessionLogs


def prompt_text(prefix):
    return " ".join(prefix) + "> "


class RecallHistory(InMemoryHistory):
    """Up-arrow history that never keeps lines typed with a leading space."""

    def append_string(self, string):
        if string.startswith(" "):
            return
        super().append_string(string)


class ArgCompleter(Completer):
    """Completes the word under the cursor as a file path."""

    def get_completions(self, document, complete_event):
        word_before_cursor = document.get_word_before_cursor(WORD=True)
        if not word_before_cursor:
            return
        word_len = len(word_before_cursor)
        for path in sorted(glob.glob(os.path.expanduser(word_before_cursor) + '*')):
            display = path
            if os.path.isdir(path):
                display += os.sep
            yield Completion(display, -word_len)


# -----------------------
# Line processor
# -----------------------
def process_line(line: str, tokenizer: Tokenizer, logs: SessionLogs) -> bool:
    """Run one prompt line. Returns the line's error flag."""
    if not line:
        return False
    # lines typed with a leading space stay out of the history
    if not line.startswith(" "):
        logs.record_history(line)
    failed = tokenizer.run(line)
    if failed:
        logs.record_error(line)
    return failed


# -----------------------
# Line sources
# -----------------------
def interactive_lines(prefix, logs: SessionLogs, input=None, output=None):
    history = RecallHistory()
    for entry in logs.load_history():
        history.append_string(entry)
    session = PromptSession(history=history, completer=ArgCompleter(),
                            input=input, output=output)
    while True:
        try:
            yield session.prompt(prompt_text(prefix))
        except KeyboardInterrupt:
            print()
            continue
        except EOFError:
            print()
            return


def script_lines(stream):
    for line in stream:
        yield line.rstrip("\r\n")


# -----------------------
# Main loop
# -----------------------
def main(argv=None):
    args = argparser.build_parser().parse_args(argv)
    prefix = [args.command, *args.args]
    logs = SessionLogs(args.log_dir, prefix)
    execute = external_runner.echo_only if args.dry_run else external_runner.execute
    tokenizer = Tokenizer(prefix, execute)

    if sys.stdin.isatty():
        lines = interactive_lines(prefix, logs)
    else:
        lines = script_lines(sys.stdin)

    try:
        for line in lines:
            with Interrupt.forward_interrupts():
                process_line(line, tokenizer, logs)
    except TokenizerStateError as e:
        print(f"internal tokenizer error: {e}", file=sys.stderr)
        return FATAL_EXIT
    return 0

if __name__ == "__main__":
    sys.exit(main())
