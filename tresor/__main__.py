"""Allow ``python -m tresor``."""

from .cli.main import main

main()
