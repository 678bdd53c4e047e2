"""CLI entry point for checking SQL files for anti-patterns."""

from sqlcheck.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
