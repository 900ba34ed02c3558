"""Allow ``python -m side_effects_lint``."""

from side_effects_lint.cli import main

main()
