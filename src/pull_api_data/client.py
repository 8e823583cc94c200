"""HTTP client for the short-term forecast API."""

from __future__ import annotations

import urllib.parse
from dataclasses import dataclass

import requests

DEFAULT_URL = (
    "http://newsky2.kma.go.kr/service/SecndSrtpdFrcstInfoService2/ForecastGrib"
)
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ForecastQuery:
    """Query parameters for a single forecast request."""

    service_key: str
    base_date: str
    base_time: str = "0600"
    nx: int = 60
    ny: int = 127
    num_of_rows: int = 10
    response_type: str = "xml"

    def params(self) -> dict[str, str]:
        # Portal keys are issued percent-encoded; requests encodes again.
        return {
            "base_date": self.base_date,
            "base_time": self.base_time,
            "nx": str(self.nx),
            "ny": str(self.ny),
            "numOfRows": str(self.num_of_rows),
            "pageSize": str(self.num_of_rows),
            "pageNo": "1",
            "startPage": "1",
            "_type": self.response_type,
            "serviceKey": urllib.parse.unquote(self.service_key),
        }


class ForecastClient:
    """Issues one blocking GET per call and returns the raw body.

    Usage::

        client = ForecastClient()
        body = client.fetch(ForecastQuery(service_key="...", base_date="20180402"))
    """

    def __init__(
        self,
        base_url: str = DEFAULT_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._session = requests.Session()

    def fetch(self, query: ForecastQuery) -> str:
        """Send the request and return the response body unparsed."""
        resp = self._session.get(
            self._base_url, params=query.params(), timeout=self._timeout,
        )
        resp.raise_for_status()
        return resp.text
