"""Allow ``python -m schema_codegen``."""

import sys

from .cli import main

sys.exit(main())
