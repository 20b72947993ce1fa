# external_runner.py
from __future__ import annotations
import os, shlex, shutil, subprocess, sys
from typing import Optional, Sequence, Tuple

NOT_FOUND = 127
NOT_EXEC  = 126
SIGNALED  = 128

def resolve_executable(cmd: str) -> Optional[str]:
    """Return absolute path to executable or None.
    If cmd contains '/', treat it as a direct path. Otherwise search PATH."""
    if "/" in cmd:
        return cmd if os.path.exists(cmd) else None
    return shutil.which(cmd)

def exit_status(returncode: int) -> int:
    # subprocess reports death by signal N as -N; shells report 128+N
    return SIGNALED - returncode if returncode < 0 else returncode

def run_external(argv: Sequence[str], *, capture: bool = False) -> Tuple[int, str, str]:
    """Run an external program and block until it exits.
    Returns (exit_code, stdout_text, stderr_text).
    If capture=False, streams directly to terminal and returns empty strings."""
    if not argv:
        return NOT_FOUND, "", "empty command\n"
    exe = resolve_executable(argv[0])
    if not exe:
        return NOT_FOUND, "", f"{argv[0]}: command not found\n"
    try:
        if capture:
            cp = subprocess.run([exe, *argv[1:]], text=True, capture_output=True)
            return exit_status(cp.returncode), cp.stdout, cp.stderr
        cp = subprocess.run([exe, *argv[1:]])
        return exit_status(cp.returncode), "", ""
    except PermissionError:
        return NOT_EXEC, "", f"{argv[0]}: permission denied\n"
    except FileNotFoundError:
        return NOT_FOUND, "", f"{argv[0]}: no such file or directory\n"
    except OSError as e:
        return NOT_EXEC, "", f"{argv[0]}: {e.strerror or e}\n"

def execute(prefix: Sequence[str], args: Sequence[str]) -> int:
    """Run prefix + args with the terminal attached; only the exit code comes back."""
    code, _, err = run_external([*prefix, *args])
    if err:
        print(err, end="", file=sys.stderr)
    return code

def echo_only(prefix: Sequence[str], args: Sequence[str]) -> int:
    """Dry-run executor: show what would run."""
    print(shlex.join([*prefix, *args]))
    return 0
