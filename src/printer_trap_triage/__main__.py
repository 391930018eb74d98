"""Module entrypoint.

Allows:
    python -m printer_trap_triage
"""

from __future__ import annotations

from printer_trap_triage.server.trap_server import main

if __name__ == "__main__":
    main()
