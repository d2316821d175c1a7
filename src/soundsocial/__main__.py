"""Allow ``python -m soundsocial``."""

import sys

from soundsocial.ui.cli.cli import main

sys.exit(main())
