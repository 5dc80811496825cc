"""
ExternalUserService - cached user lookups on top of ReqResApiClient.
"""

import asyncio

from loguru import logger

from reqres_client.models import User, UserPage, UserResponse
from reqres_client.services.cache import CacheManager
from reqres_client.services.client import ReqResApiClient
from reqres_client.services.errors import NotFoundError, PaginationConsistencyError
from reqres_client.settings import Settings

ALL_USERS_CACHE_KEY = "all_users"


def user_cache_key(user_id: int) -> str:
    return f"user_{user_id}"


class ExternalUserService:
    """
    Answers single-user and full-collection queries.

    Reads go through the cache first; misses hit the API client and are
    stored with the configured TTL. Failures are never cached.

    Usage:
        async with ExternalUserService.from_settings(Settings.from_env()) as service:
            user = await service.get_user_by_id(2)
            users = await service.get_all_users()
    """

    def __init__(
        self,
        api_client: ReqResApiClient,
        cache: CacheManager,
        settings: Settings,
    ):
        self._api_client = api_client
        self._cache = cache
        self._settings = settings

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExternalUserService":
        """Wire a service with its own API client and cache."""
        cache = CacheManager(
            enabled=settings.enable_caching,
            default_ttl=settings.cache_ttl,
        )
        return cls(ReqResApiClient(settings), cache, settings)

    @property
    def cache(self) -> CacheManager:
        return self._cache

    async def get_user_by_id(self, user_id: int) -> User:
        """
        Get a single user.

        Raises:
            NotFoundError: If the API returns 404 or an envelope without data
            ApiError: On any other failed request
            DeserializationError: If the body does not match the user envelope
        """
        cache_key = user_cache_key(user_id)

        cached = await self._cache.get(cache_key)
        if cached:
            logger.info(f"Retrieved user {user_id} from cache")
            return cached.data

        logger.info(f"Fetching user {user_id} from API")
        path = f"users/{user_id}"
        response = await self._api_client.get(path, UserResponse)

        if response.data is None:
            logger.warning(f"User {user_id} not found")
            raise NotFoundError(path, f"User with ID {user_id} not found")

        await self._cache.set(cache_key, response.data, self._settings.cache_ttl)
        return response.data

    async def get_all_users(self) -> list[User]:
        """
        Get every user, following pagination across all pages.

        Pages 2..N are fetched concurrently; the result keeps page order and
        the server's order within each page. Any page failure aborts the
        whole call without caching anything.
        """
        cached = await self._cache.get(ALL_USERS_CACHE_KEY)
        if cached:
            logger.info("Retrieved all users from cache")
            return list(cached.data)

        logger.info("Fetching all users from API")
        first_page = await self._fetch_page(1)
        if first_page.total_pages < 1:
            raise PaginationConsistencyError(
                f"Page 1 reported total_pages={first_page.total_pages}",
                path=_page_path(1),
            )

        try:
            remaining = await self._fetch_pages(range(2, first_page.total_pages + 1))
        except Exception as e:
            logger.error(f"Failed to fetch all users: {e}")
            raise

        pages = [first_page, *remaining]
        users = _aggregate(pages)

        logger.info(f"Fetched {len(users)} users across {len(pages)} pages")
        await self._cache.set(ALL_USERS_CACHE_KEY, users, self._settings.cache_ttl)
        return list(users)

    async def _fetch_page(self, page: int) -> UserPage:
        return await self._api_client.get(_page_path(page), UserPage)

    async def _fetch_pages(self, page_numbers: range) -> list[UserPage]:
        """Fetch pages concurrently, returning them in the order requested."""
        if not page_numbers:
            return []

        semaphore = asyncio.Semaphore(self._settings.max_concurrent_pages)

        async def fetch(page: int) -> UserPage:
            async with semaphore:
                return await self._fetch_page(page)

        tasks = [asyncio.create_task(fetch(page)) for page in page_numbers]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            # Let cancelled siblings unwind before propagating
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def close(self) -> None:
        await self._api_client.close()

    async def __aenter__(self) -> "ExternalUserService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _page_path(page: int) -> str:
    return f"users?page={page}"


def _aggregate(pages: list[UserPage]) -> list[User]:
    """Concatenate page data, checking the pages agree with each other."""
    first = pages[0]
    users: list[User] = []

    for number, page in enumerate(pages, start=1):
        if page.page != number:
            raise PaginationConsistencyError(
                f"Requested page {number} but API returned page {page.page}",
                path=_page_path(number),
            )
        if (page.total, page.total_pages, page.per_page) != (
            first.total,
            first.total_pages,
            first.per_page,
        ):
            raise PaginationConsistencyError(
                f"Page {number} reported total={page.total}, "
                f"total_pages={page.total_pages}, per_page={page.per_page}; "
                f"page 1 reported total={first.total}, "
                f"total_pages={first.total_pages}, per_page={first.per_page}",
                path=_page_path(number),
            )
        if len(page.data) > page.per_page:
            raise PaginationConsistencyError(
                f"Page {number} returned {len(page.data)} items "
                f"but per_page is {page.per_page}",
                path=_page_path(number),
            )
        users.extend(page.data)

    if len(users) != first.total:
        raise PaginationConsistencyError(
            f"Aggregated {len(users)} users but API reported total={first.total}",
            path=_page_path(1),
        )

    return users
