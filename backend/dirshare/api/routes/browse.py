"""Browsing routes: HTML listings for directories, downloads for files."""

from __future__ import annotations

import logging
import os
from urllib.parse import unquote_to_bytes

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response

from dirshare.api.deps import client_ip, get_delivery, get_resolver
from dirshare.services.directory_lister import list_directory
from dirshare.services.file_delivery import DeliveryKind, FileDelivery
from dirshare.services.path_resolver import PathResolver
from dirshare.utils.listing_page import render_listing

logger = logging.getLogger(__name__)
router = APIRouter()

FILES_PREFIX = b"/files/"


@router.get("/", include_in_schema=False)
async def list_root(
    request: Request,
    resolver: PathResolver = Depends(get_resolver),
    delivery: FileDelivery = Depends(get_delivery),
):
    """Listing of the shared root."""
    return await _browse(request, "", resolver, delivery)


@router.get("/files/{path:path}", include_in_schema=False)
async def browse(
    path: str,
    request: Request,
    resolver: PathResolver = Depends(get_resolver),
    delivery: FileDelivery = Depends(get_delivery),
):
    """Directory listing or file download, nested paths included."""
    return await _browse(request, _filesystem_path(request, path), resolver, delivery)


def _filesystem_path(request: Request, path: str) -> str:
    """Decode the raw request path byte-wise so non-UTF-8 names round-trip."""
    raw = request.scope.get("raw_path")
    if not raw or not raw.startswith(FILES_PREFIX):
        return path
    return os.fsdecode(unquote_to_bytes(raw[len(FILES_PREFIX):]))


async def _browse(
    request: Request,
    path: str,
    resolver: PathResolver,
    delivery: FileDelivery,
) -> Response:
    ip = client_ip(request)
    resolved = await resolver.resolve(path)

    if resolved.is_dir:
        listing = await list_directory(resolved.path, resolved.relative)
        logger.info("Directory listing for /%s [%s]", resolved.relative, ip)
        return HTMLResponse(
            render_listing(listing.folders, listing.files, listing.path),
            headers={"Accept-Ranges": "bytes"},
        )

    plan = await delivery.deliver(resolved, "/files/" + path, request.headers.get("range"))
    if plan.kind == DeliveryKind.PARTIAL:
        logger.info("Partial content /%s %s [%s]", resolved.relative, plan.content_range, ip)
    else:
        logger.info("File served /%s (%s, %d bytes) [%s]", resolved.relative, plan.kind.value, plan.content_length, ip)
    return plan.to_response()
