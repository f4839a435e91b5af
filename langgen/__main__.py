"""Allow ``python -m langgen``."""

import sys

from langgen.cli import main

sys.exit(main())
