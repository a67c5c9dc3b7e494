"""Allow running as ``python -m linkcopy``."""

from linkcopy.cli.main import main

if __name__ == "__main__":
    main()
