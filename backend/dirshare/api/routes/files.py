"""File API routes — JSON directory listing."""

from fastapi import APIRouter, Depends, HTTPException

from dirshare.api.deps import get_resolver
from dirshare.schemas.files import DirectoryListing
from dirshare.services.directory_lister import list_directory
from dirshare.services.path_resolver import PathResolver

router = APIRouter()


@router.get("/list", response_model=DirectoryListing)
async def list_files(path: str = "/", resolver: PathResolver = Depends(get_resolver)):
    """Sorted folders and files of a directory under the shared root."""
    resolved = await resolver.resolve(path)
    if not resolved.is_dir:
        raise HTTPException(400, "Not a directory")
    return await list_directory(resolved.path, resolved.relative)
