"""Main entry point for ReviewDesk."""

import sys

from reviewdesk.cli import main as cli_main


def main():
    """Main entry point - delegates to the CLI."""
    cli_main(sys.argv[1:])


if __name__ == "__main__":
    main()
