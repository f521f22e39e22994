"""Allow ``python -m contentwrap``."""

from contentwrap.cli import main

if __name__ == "__main__":
    main()
