"""CLI tools for listening-to.

- ``python -m listening_to`` / ``python -m listening_to.cli.fetch`` —
  resolve the current track once and print it as text or JSON, or write
  it to a file for a build step to pick up.
"""
