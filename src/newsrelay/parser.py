"""
Turn raw response bodies into JSON documents.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional


class ResponseParser:
    def parse(self, body: Optional[str]) -> Optional[Dict[str, Any]]:
        """
        Return the JSON object held in ``body``, or None when the body is
        missing, malformed, or holds something other than an object.
        """

        if body is None:
            return None
        try:
            document = json.loads(body)
        except (TypeError, ValueError):
            return None
        if not isinstance(document, dict):
            return None
        return document
