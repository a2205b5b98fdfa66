"""Module entrypoint for ``python -m lazydired``.

All argument parsing and runtime setup happen in ``lazydired.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
