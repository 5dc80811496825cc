"""
ReqRes client demo entry point.
Fetches a single user, lists all users, then shows the error for a missing user.
"""

import asyncio

from loguru import logger

from reqres_client.services import ExternalUserService, ServiceError
from reqres_client.settings import Settings


async def main() -> None:
    """Run the demo against the configured API."""
    logger.info("Starting ReqRes API client demo...")

    settings = Settings.from_env()
    service = ExternalUserService.from_settings(settings)

    try:
        # Single user
        logger.info("Fetching user with ID 2...")
        user = await service.get_user_by_id(2)
        logger.info(f"User found: {user.full_name} ({user.email})")

        # All users
        logger.info("Fetching all users...")
        users = await service.get_all_users()
        logger.info(f"All users ({len(users)}):")
        for u in users:
            logger.info(f"- {u.id}: {u.full_name} ({u.email})")

        # Non-existent user
        logger.info("Trying to fetch a non-existent user (ID 999)...")
        try:
            await service.get_user_by_id(999)
        except ServiceError as e:
            logger.info(f"Error: {e}")

    except ServiceError as e:
        logger.error(f"An error occurred: {e}")
    finally:
        await service.close()
        logger.info(f"Cache stats: {service.cache.get_stats().to_dict()}")
        logger.info("Demo finished")


if __name__ == "__main__":
    asyncio.run(main())
