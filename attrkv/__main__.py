"""Allow ``python -m attrkv``."""

from .cli import main

if __name__ == "__main__":
    main()
