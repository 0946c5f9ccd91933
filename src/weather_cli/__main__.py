"""Allow `python -m weather_cli`."""

import sys

from .cli import main

sys.exit(main())
