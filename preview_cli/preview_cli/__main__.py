"""Entry point for `python -m preview_cli` and the `livepreview` console script."""

from __future__ import annotations

from preview_cli.app import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
