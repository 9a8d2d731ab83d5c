"""
Dependency injection for API endpoints.

The repository is created once per process by the app lifespan and
shared by every request. Tests replace it with
``app.dependency_overrides[get_repo]``.
"""

from typing import Annotated

from fastapi import Depends

from ..core.config import get_settings
from ..repositories import TrendsRepository, get_repository

_repo_instance: TrendsRepository | None = None


def get_repo() -> TrendsRepository:
    """
    Dependency that provides the Record Store repository.

    Returns:
        TrendsRepository built from settings
    """
    global _repo_instance
    if _repo_instance is None:
        _repo_instance = get_repository(get_settings())
    return _repo_instance


async def close_repo() -> None:
    """Close the global repository. Called at app shutdown."""
    global _repo_instance
    if _repo_instance is not None:
        await _repo_instance.close()
        _repo_instance = None


# Type alias for dependency injection
RepositoryDependency = Annotated[TrendsRepository, Depends(get_repo)]
