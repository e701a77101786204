"""Module entrypoint for ``python -m fuzzyscope``.

All argument parsing and runtime setup happen in ``fuzzyscope.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
