"""Allow running PyFiction with ``python -m pyfiction``."""

import sys

from pyfiction.cli import main

sys.exit(main())
