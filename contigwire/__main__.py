"""Allow `python -m contigwire`."""

from .cli import main

main()
