"""Allow ``python -m listening_to`` execution."""

from listening_to.cli.fetch import main

main()
