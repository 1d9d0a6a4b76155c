"""
Profile endpoints backed by the shared ProfileCache.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from moneyflow.schemas.profile import ProfileRead
from moneyflow.services.profile_service import (
    ProfileCache,
    ProfileNotFoundError,
    RemoteFetchError,
    get_profile_cache,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{profile_id}", response_model=ProfileRead)
async def get_profile(
    profile_id: str,
    force_refresh: bool = Query(False, description="Bypass the cache"),
    cache: ProfileCache = Depends(get_profile_cache),
):
    """
    Return a profile, from cache when fresh.

    404 if the profile store has no such row, 502 if the lookup fails.
    """
    try:
        profile = await cache.get_profile(profile_id, force_refresh=force_refresh)
    except ProfileNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found",
        )
    except RemoteFetchError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Profile store unavailable: {exc.reason}",
        )

    return ProfileRead(**profile)


@router.delete("/cache", status_code=status.HTTP_204_NO_CONTENT)
async def clear_profile_cache(cache: ProfileCache = Depends(get_profile_cache)):
    """Drop every cached profile."""
    cache.invalidate()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{profile_id}/cache", status_code=status.HTTP_204_NO_CONTENT)
async def invalidate_profile(
    profile_id: str,
    cache: ProfileCache = Depends(get_profile_cache),
):
    """Drop the cached entry for one profile."""
    cache.invalidate(profile_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
