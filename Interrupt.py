# Interrupt.py - Ctrl-C while a prefixed command is running

import signal
from contextlib import contextmanager


# -----------------------------
#   SIGINT  (Ctrl-C)
# -----------------------------
def handle_sigint(signum, frame):
    # The child shares our process group and gets the SIGINT itself.
    # The session stays alive and the line keeps going.
    pass


# -----------------------------
#   SETUP
# -----------------------------
@contextmanager
def forward_interrupts():
    """
    Wrap the processing of one line:
        with Interrupt.forward_interrupts():
            process_line(...)
    The previous SIGINT handler is restored on exit, so Ctrl-C at the
    prompt behaves normally again.
    """
    previous = signal.signal(signal.SIGINT, handle_sigint)
    try:
        yield
    finally:
        # None means the old handler was not installed from Python
        signal.signal(signal.SIGINT, previous if previous is not None else signal.default_int_handler)
