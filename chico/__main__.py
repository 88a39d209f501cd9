"""Allow ``python -m chico``."""

from chico.main import cli

cli()
