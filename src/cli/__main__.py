"""Module entrypoint for modscope CLI."""

from __future__ import annotations

from cli.app import app


def main() -> None:
    """Run the modscope CLI."""
    app.meta()


if __name__ == "__main__":
    main()
