"""Entry point for `python -m airplane_mode`."""

from airplane_mode.cli import cli


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
