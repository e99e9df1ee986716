"""Allow ``python -m ctsnooper``."""

from .cli import main

main()
