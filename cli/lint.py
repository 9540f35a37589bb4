from cli._runner import run


def main() -> None:
    """Run linting."""
    import sys

    sys.exit(run(["uv", "run", "ruff", "check", "txn_explorer", "tests", "cli"]))


def format() -> None:
    """Run code formatting."""
    import sys

    sys.exit(run(["uv", "run", "ruff", "format", "txn_explorer", "tests", "cli"]))
