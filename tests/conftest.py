from __future__ import annotations

import os

os.environ.setdefault("INDEXED_TEXT_DISABLE_CONSOLE", "1")
os.environ.setdefault("INDEXED_TEXT_LOG_LEVEL", "WARNING")
