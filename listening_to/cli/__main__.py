"""Allow ``python -m listening_to.cli`` execution."""

from listening_to.cli.fetch import main

main()
