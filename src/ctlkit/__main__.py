"""Allow ``python -m ctlkit <client> ...`` invocation.

The first argument names the client (``netcfgctl`` or ``newdctl``); the
rest is handled exactly as by that client's console script.
"""

from __future__ import annotations

import sys

from ctlkit.cli.app import dispatch

if __name__ == "__main__":
    sys.exit(dispatch())
