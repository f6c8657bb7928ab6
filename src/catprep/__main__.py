"""Allow running as ``python -m catprep``."""

from catprep.cli import main

main()
