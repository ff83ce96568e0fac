"""Run the Victoury MCP server from a source checkout."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from victoury_mcp.interfaces.cli import main

if __name__ == "__main__":
    main()
