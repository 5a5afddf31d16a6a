# mydpo/main.py
from __future__ import annotations

from mydpo.bootstrap import create_app
from mydpo.lifecycle import register_lifecycle

app = create_app()
register_lifecycle(app)
