"""Allow running as ``python -m global_filters.cli``."""

from global_filters.cli.main import main

main()
