import logging
from typing import Iterable
from urllib.parse import parse_qsl, urlencode, urlsplit

logger = logging.getLogger(__name__)


class UrlUtils:
    """A collection of static methods for comparing page URLs."""

    @staticmethod
    def strip_tracking_params(url: str, tracking_params: Iterable[str]) -> str:
        """
        Normalizes a URL for duplicate detection.

        Drops tracking parameters, sorts the remaining query parameters by name
        (stable for repeated names) and removes the fragment. URLs that are not
        absolute are returned unchanged.
        """
        try:
            parts = urlsplit(url)
        except ValueError:
            logger.debug("Could not parse URL for normalization: %s", url)
            return url

        if not parts.scheme or not parts.netloc:
            return url

        blocked = set(tracking_params)
        query = [
            (key, value)
            for key, value in parse_qsl(parts.query, keep_blank_values=True)
            if key not in blocked
        ]
        query.sort(key=lambda pair: pair[0])

        origin = f"{parts.scheme.lower()}://{parts.netloc.lower()}"
        path = parts.path or "/"
        search = f"?{urlencode(query)}" if query else ""
        return origin + path + search
