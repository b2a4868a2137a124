"""
CLI layer for workscript.

Terminal transport only: the ``workscript`` Typer launcher, the target
loader, and the Rich renderer that prints invocation outcomes.  All of
the adapting work lives in ``workscript.adapter``.

Entry point::

    workscript --help
"""
