"""Entrypoint for `python -m boathouse_maint`."""

from .cli import main


if __name__ == "__main__":
    main()
