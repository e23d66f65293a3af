"""Module entrypoint for ``python -m hunkselect``."""

from .cli import main


if __name__ == "__main__":
    main()
