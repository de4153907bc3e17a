import os

from recallsh.config import SHELL_NAME


def builtin_exit():
    """Leave the shell. Background jobs are left running."""
    raise SystemExit(0)


def builtin_pwd(terminal):
    try:
        terminal.write(os.getcwd() + "\n")
        return 0
    except OSError as e:
        terminal.write(f"{SHELL_NAME}: pwd: {e.strerror}\n")
        return 1


def builtin_cd(args, terminal):
    """Change directory; the working directory is untouched on failure"""
    if len(args) != 1:
        terminal.write("Invalid directory.\n")
        return 1

    path = args[0]
    try:
        os.chdir(os.path.expanduser(path))
        return 0
    except OSError as e:
        terminal.write(f"{path}: Invalid directory. ({e.strerror})\n")
        return 1


def builtin_history(log, terminal):
    log.dump(terminal.fd)
    return 0


def builtin_jobs(jobs, terminal):
    terminal.write(jobs.show())
    return 0


def execute_builtin(argv, log, jobs, terminal):
    """
    Execute built-in command if it matches.
    Returns (executed: bool, exit_code: int)
    """
    if not argv:
        return False, 0

    cmd = argv[0]
    args = argv[1:]

    if cmd == "exit":
        builtin_exit()
    elif cmd == "pwd":
        return True, builtin_pwd(terminal)
    elif cmd == "cd":
        return True, builtin_cd(args, terminal)
    elif cmd == "history":
        return True, builtin_history(log, terminal)
    elif cmd == "jobs":
        return True, builtin_jobs(jobs, terminal)

    return False, 0
