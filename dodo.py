from doit.action import CmdAction


def task_format():
    """Sort imports and format src/, tests/ and scripts/ with ruff."""

    def router(check=False):
        targets = "src tests scripts dodo.py"
        if check:
            # Report only, for CI
            return f"ruff check --select I {targets} && ruff format --check {targets}"
        return f"ruff check --select I --fix {targets} && ruff format {targets}"

    return {
        "actions": [CmdAction(router)],
        "params": [
            {
                "name": "check",
                "long": "check",
                "default": False,
                "type": bool,
                "help": "Fail on unformatted files instead of rewriting them",
            },
        ],
        "verbosity": 2,
    }


def task_test():
    """Run the test suite with pytest."""

    def router(k="", verbose=False):
        cmd = "pytest tests"
        if k:
            cmd += f" -k '{k}'"
        if verbose:
            cmd += " -v"
        return cmd

    return {
        "actions": [CmdAction(router)],
        "params": [
            {
                "name": "k",
                "short": "k",
                "default": "",
                "type": str,
                "help": "Only run tests matching this expression",
            },
            {
                "name": "verbose",
                "long": "verbose",
                "default": False,
                "type": bool,
            },
        ],
        "verbosity": 2,
    }
