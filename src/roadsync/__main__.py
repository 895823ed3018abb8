"""Allow ``python -m roadsync``."""

from roadsync.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
