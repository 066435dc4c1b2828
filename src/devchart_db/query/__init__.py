from __future__ import annotations

from devchart_db.query.api import DevchartAPI, open_default_api

__all__ = ["DevchartAPI", "open_default_api"]
