"""Allow ``python -m workscript``."""

from workscript.cli.app import app

app(prog_name="workscript")
