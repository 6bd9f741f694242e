"""Overpass API access with mirror fallback."""

import logging

import httpx

from ..config import Settings

logger = logging.getLogger(__name__)


def make_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=settings.request_timeout_s,
        headers={"User-Agent": settings.user_agent},
    )


async def _post_to_mirrors(client, query: str, servers: list[str]) -> list[dict] | None:
    for server in servers:
        try:
            response = await client.post(server, data={"data": query})
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as exc:
            logger.warning("Overpass server %s timed out: %s", server, exc)
            continue
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Overpass server %s returned HTTP %s", server, exc.response.status_code
            )
            continue
        except Exception as exc:
            logger.warning("Overpass server %s failed: %s", server, exc)
            continue

        if not isinstance(data, dict):
            logger.warning("Overpass server %s returned a non-object response", server)
            continue
        remark = str(data.get("remark") or "")
        if "error" in remark.lower():
            logger.warning("Overpass server %s reported: %s", server, remark)
            continue
        elements = data.get("elements")
        if not isinstance(elements, list):
            logger.warning("Overpass server %s returned no elements array", server)
            continue
        return elements
    return None


async def query_overpass(query: str, settings: Settings, client=None) -> list[dict]:
    """Execute an Overpass query, trying each configured mirror in turn.

    Any transport or response failure moves on to the next mirror; when all of
    them fail the query yields an empty list.
    """
    if client is None:
        async with make_client(settings) as own_client:
            elements = await _post_to_mirrors(own_client, query, settings.overpass_servers)
    else:
        elements = await _post_to_mirrors(client, query, settings.overpass_servers)

    if elements is None:
        logger.warning("All Overpass servers failed for query")
        return []
    return elements
