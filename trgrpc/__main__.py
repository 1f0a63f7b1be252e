"""Allow running as python -m trgrpc."""

from trgrpc.cli.main import main

if __name__ == "__main__":
    main()
