"""csvofx package initializer.

Converts a bank CSV export into an OFX 1.02 statement.  The two entry points
are :func:`csvofx.etl.load_and_prepare` and :func:`csvofx.build_ofx.build_ofx`.
"""

__all__: list[str] = [
    "build_ofx",
    "config",
    "errors",
    "etl",
]
