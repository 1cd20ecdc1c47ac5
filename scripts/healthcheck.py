#!/usr/bin/env python
"""Container healthcheck: exits 0 when the home page app answers /readyz."""

import json
import os
import sys
from urllib import request, error


def probe(url: str, timeout: float = 5.0) -> bool:
    try:
        with request.urlopen(url, timeout=timeout) as resp:
            if resp.status != 200:
                return False
            body = json.loads(resp.read().decode("utf-8") or "{}")
    except (error.URLError, OSError, ValueError):
        return False
    return body.get("status") == "ready"


def main() -> int:
    host = os.getenv("HEALTHCHECK_HOST", "127.0.0.1")
    port = os.getenv("PORT", "3000")
    return 0 if probe(f"http://{host}:{port}/readyz") else 1


if __name__ == "__main__":
    sys.exit(main())
