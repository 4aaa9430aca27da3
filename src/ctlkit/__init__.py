"""ctlkit — command-line control clients for local system daemons.

Each client turns its argv into one typed request through a static
command grammar, sends it over a Unix-domain socket and renders the
daemon's reply stream.
"""

from ctlkit.version import __version__

__all__: list[str] = ["__version__"]
