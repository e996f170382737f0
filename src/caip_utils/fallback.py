import logging
from typing import Awaitable, Callable, Optional, Sequence, TypeVar

from .exceptions import RpcFallbackError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def fetch_with_fallback(
    endpoints: Sequence[str],
    fetch: Callable[[str], Awaitable[T]],
    description: str = "data",
) -> T:
    """
    Run ``fetch`` against each endpoint in order until one succeeds.

    Attempts are sequential; the first success short-circuits the rest.

    Args:
        endpoints: Ordered candidate endpoint URLs
        fetch: Unit of work taking an endpoint URL
        description: What is being fetched, used in log and error messages

    Returns:
        The first successful result

    Raises:
        RpcFallbackError: If there are no endpoints or every attempt failed
    """
    if not endpoints:
        raise RpcFallbackError(f"No endpoints to fetch {description} from")

    last_error: Optional[Exception] = None
    for attempt, endpoint in enumerate(endpoints, start=1):
        try:
            logger.info(f"Fetching {description} from RPC {attempt}/{len(endpoints)}: {endpoint}")
            return await fetch(endpoint)
        except Exception as e:
            last_error = e
            logger.warning(f"RPC attempt {attempt} failed for {endpoint}: {e}")

    raise RpcFallbackError(
        f"Failed to fetch {description} after {len(endpoints)} RPC attempts. "
        f"Last error: {last_error or 'Unknown error'}"
    )
