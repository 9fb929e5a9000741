"""Entry point for ``python -m jsbastard``."""

from jsbastard.main import main

if __name__ == "__main__":
    raise SystemExit(main())
