from __future__ import annotations

import logging

from storefront.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Attach one stream handler to the ``storefront`` logger tree."""
    root = logging.getLogger("storefront")
    root.setLevel(settings.LOG_LEVEL.upper())
    if not any(getattr(h, "_storefront", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._storefront = True  # type: ignore[attr-defined]
        root.addHandler(handler)
