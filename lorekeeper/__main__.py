"""Allows running lorekeeper with `python -m lorekeeper`."""

from lorekeeper.configuration.cli import main

main()
