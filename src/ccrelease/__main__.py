"""Allow ``python -m ccrelease``."""

from ccrelease.cli import main

main()
