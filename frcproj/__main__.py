"""Allow ``python -m frcproj``."""

from frcproj.cli import main

if __name__ == "__main__":
    main()
