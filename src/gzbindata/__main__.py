from __future__ import annotations

import sys

from gzbindata.main import main

sys.exit(main())
