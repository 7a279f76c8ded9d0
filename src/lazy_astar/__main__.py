"""Allow ``python -m lazy_astar``."""

from lazy_astar.cli.main import main

main()
