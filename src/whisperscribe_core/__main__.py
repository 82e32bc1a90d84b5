"""Allow ``python -m whisperscribe_core``."""

import sys

from whisperscribe_core.cli import main

sys.exit(main())
