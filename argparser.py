# argparser.py
import argparse
import os

LOG_DIR_ENV = "CMDPREFIX_LOG_DIR"

def default_log_dir():
    return os.environ.get(LOG_DIR_ENV) or os.path.join(os.path.expanduser("~"), ".cmdprefix")

def build_parser():
    parser = argparse.ArgumentParser(
        prog="cmdprefix",
        description="Repeatedly prompt for arguments and run COMMAND PREFIX-ARGS... with them. "
                    "Use ';' to run several commands from one line and '#' to start a comment.")
    parser.add_argument("--log-dir", default=default_log_dir(),
                        help=f"where .history and .errors files are kept (default: ${LOG_DIR_ENV} or ~/.cmdprefix)")
    parser.add_argument("-n", "--dry-run", action="store_true",
                        help="print each command instead of running it")
    parser.add_argument("command")
    # everything after the command is part of the fixed prefix, options included
    parser.add_argument("args", nargs=argparse.REMAINDER)
    return parser
