"""Allow ``python -m calcapi``."""

from calcapi.cli import main

if __name__ == "__main__":
    main()
