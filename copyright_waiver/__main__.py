"""Allow ``python -m copyright_waiver``."""

import sys

from copyright_waiver.cli import main

sys.exit(main())
