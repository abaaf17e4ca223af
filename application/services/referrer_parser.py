# application/services/referrer_parser.py
from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

from domain.routes import RouteIdentity


class ReferrerParser:
    """
    Maps a referrer URL onto the "{controller}/{action}/{id?}" route template.

    Anything that does not fit the template yields None.
    """

    def parse(self, referrer: Optional[str]) -> Optional[RouteIdentity]:
        if not referrer or not referrer.strip():
            return None
        try:
            path = urlsplit(referrer.strip()).path
        except ValueError:
            return None

        segments = [s for s in path.split("/") if s]
        if len(segments) < 2 or len(segments) > 3:
            return None

        controller, action = segments[0], segments[1]
        if not controller.isidentifier() or not action.isidentifier():
            return None
        return RouteIdentity(controller=controller, action=action)
