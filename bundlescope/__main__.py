"""Run the command line interface with ``python -m bundlescope``."""

import sys

from bundlescope.cli import main

sys.exit(main())
