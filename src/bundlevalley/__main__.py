"""Allow ``python -m bundlevalley``."""

from bundlevalley.cli import main

main()
