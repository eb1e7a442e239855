import logging

import requests

from errors import EvaluationError

log = logging.getLogger(__name__)

# Ask the node for Int values as text so longs above 2**53 survive JSON
EVALUATE_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json; large-significand-format=string",
}


class NodeEvaluator:
    """
    Thin client for the Waves node REST API. No retries: a failed call raises
    EvaluationError right away.
    """

    def __init__(self, host: str, timeout: float = 10, session=None):
        self.host = host.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method, path, **kwargs):
        url = f"{self.host}{path}"
        try:
            res = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            log.warning("wns error: %s %s failed: %s", method, url, e)
            raise EvaluationError(f"request to {url} failed: {e}") from e

        if res.status_code != 200:
            log.warning("wns error: %s %s returned %s", method, url, res.status_code)
            raise EvaluationError(f"{url} returned HTTP {res.status_code}", status_code=res.status_code)

        try:
            return res.json()
        except ValueError as e:
            raise EvaluationError(f"{url} returned invalid JSON", status_code=res.status_code) from e

    def evaluate(self, address: str, expr: str) -> dict:
        """Evaluate `expr` against the dApp at `address`; returns the raw SE tree."""
        log.debug("evaluate %s @ %s", expr, address)
        data = self._request(
            "POST",
            f"/utils/script/evaluate/{address}",
            json={"expr": expr},
            headers=EVALUATE_HEADERS,
        )

        if not isinstance(data, dict):
            raise EvaluationError(f"unexpected evaluate response: {data!r}")
        if "error" in data:
            message = data.get("message") or f"evaluation error {data['error']}"
            log.warning("wns error: %s (expr: %s)", message, expr)
            raise EvaluationError(message)
        if "result" not in data:
            raise EvaluationError(f"evaluate response has no result: {data!r}")
        return data["result"]

    def last_block_timestamp(self) -> int:
        data = self._request("GET", "/blocks/headers/last")
        try:
            return int(data["timestamp"])
        except (KeyError, TypeError, ValueError) as e:
            raise EvaluationError(f"block header has no timestamp: {data!r}") from e

    def data_entry(self, address: str, key: str) -> dict:
        """One entry of an account's data storage: {"key", "type", "value"}."""
        data = self._request("GET", f"/addresses/data/{address}/{key}")
        if not isinstance(data, dict):
            raise EvaluationError(f"unexpected data entry for {key}: {data!r}")
        return data

    def nfts(self, address: str, limit: int = 1000) -> list:
        data = self._request("GET", f"/assets/nft/{address}/limit/{limit}")
        if not isinstance(data, list):
            raise EvaluationError(f"unexpected NFT listing: {data!r}")
        return data
