"""
HTTP reachability probe for custom domains.
"""

import logging

import httpx

from bizhub.app.services.domain_verification import IReachabilityProbe

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class HttpxReachabilityProbe(IReachabilityProbe):
    """
    HEAD ``https://<domain>`` and report success on a 2xx answer.

    Redirects are followed. Timeouts, DNS and TLS failures all count as
    unreachable.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport = None,
    ):
        self.timeout = timeout
        self.transport = transport

    async def is_reachable(self, domain: str) -> bool:
        url = f"https://{domain}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.head(url)
        except httpx.HTTPError as exc:
            logger.info(f"Probe of {url} failed: {exc!r}")
            return False

        return response.is_success
