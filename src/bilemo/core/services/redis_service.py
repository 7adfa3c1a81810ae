"""Redis connection service for managing Redis client lifecycle and health checks."""

from loguru import logger
from redis.asyncio import Redis, from_url
from redis.backoff import ExponentialBackoff
from redis.retry import Retry

from src.bilemo.runtime.context import get_config


class RedisService:
    """Service for managing the Redis client backing the collection cache.

    Follows the same pattern as DbSessionService: built once at start-up,
    stored on the application dependencies, closed on shutdown.
    """

    def __init__(self, client: Redis | None = None):
        """Initialize the Redis service with connection pooling.

        Args:
            client: Prebuilt client, used by tests; built from config otherwise
        """
        config = get_config()
        redis_config = config.redis

        self._url = redis_config.url
        self._client = client
        self._enabled = client is not None or redis_config.enabled

        if client is not None:
            return

        if not self._enabled:
            logger.info("Redis is disabled, service will not connect")
            return

        if not self._url:
            logger.warning("Redis URL not configured, service will not connect")
            self._enabled = False
            return

        logger.info(
            "Initializing Redis client with connection string: {}",
            redis_config.sanitized_connection_string,
        )

        retry = Retry(ExponentialBackoff(base=1, cap=10), retries=3)

        try:
            self._client = from_url(
                redis_config.connection_string,
                encoding="utf-8",
                decode_responses=redis_config.decode_responses,
                max_connections=redis_config.max_connections,
                socket_timeout=redis_config.socket_timeout,
                socket_connect_timeout=redis_config.socket_connect_timeout,
                health_check_interval=30,
                retry=retry,
                client_name="bilemo_cache",
            )
        except ValueError as e:
            logger.error("Failed to initialize Redis client: {}", e)
            self._enabled = False
            self._client = None
            if config.app.environment == "production":
                raise

    def get_client(self) -> Redis | None:
        """Get the Redis async client instance, None when disabled."""
        if not self._enabled or not self._client:
            return None
        return self._client

    async def health_check(self) -> bool:
        """Perform a health check on the Redis connection."""
        if not self._enabled or not self._client:
            logger.debug("Redis is disabled, health check skipped")
            return False

        try:
            await self._client.ping()
            return True
        except Exception as e:
            logger.error(
                "Redis health check failed",
                extra={
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            return False

    async def close(self) -> None:
        """Close the Redis connection and clean up resources."""
        if self._client:
            try:
                logger.info("Closing Redis connection")
                await self._client.aclose()
            except Exception as e:
                logger.error("Error closing Redis connection: {}", e)
            finally:
                self._client = None
