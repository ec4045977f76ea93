import sys

from scanotron.cli import main as run_cli


def main() -> None:
    """Entry point: parse arguments -> build pipeline -> run both stages."""
    sys.exit(run_cli(sys.argv[1:]))


if __name__ == "__main__":
    main()
