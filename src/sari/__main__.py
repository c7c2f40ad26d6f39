"""Allow running sari as ``python -m sari``."""

from sari.cli import main

if __name__ == "__main__":
    main()
