"""Gallery listing, upload, edit, delete, likes and comments."""

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.api.deps import get_pipeline, get_settings, get_viewer
from gallery.core.config import Settings
from gallery.core.viewer import Viewer
from gallery.db.session import get_db
from gallery.schemas import (
    CommentCreate,
    CommentResponse,
    ImageSummary,
    ImageUpdate,
    UploadedImageResponse,
)
from gallery.services import IngestionPipeline, UploadFields, comments, images
from gallery.services.authorization import require_account, require_authenticated
from gallery.services.gallery_query import GalleryQuery, list_gallery

router = APIRouter()


@router.get("", response_model=list[ImageSummary], response_model_exclude_unset=True)
async def list_images(
    album_id: str | None = None,
    sort: str | None = None,
    order: str | None = None,
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
) -> list[ImageSummary]:
    """
    List images with like and comment counts.

    ``sort`` is one of created_at, date_taken, title, like_count and
    ``order`` is asc or desc. ``user_liked`` is only present for logged-in
    users.
    """
    query = GalleryQuery.from_params(album_id=album_id, sort=sort, order=order)
    rows = await list_gallery(db, query, viewer)
    return [ImageSummary.model_validate(row) for row in rows]


@router.post("", response_model=UploadedImageResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(
    image: UploadFile | None = File(None),
    title: str | None = Form(None),
    description: str | None = Form(None),
    album_id: str | None = Form(None),
    date_taken: str | None = Form(None),
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
    pipeline: IngestionPipeline = Depends(get_pipeline),
) -> UploadedImageResponse:
    """Upload one image (multipart field ``image``)."""
    fields = UploadFields(
        title=title,
        description=description,
        album_id=album_id,
        date_taken=date_taken,
    )
    record = await pipeline.ingest(db, image, fields, viewer)
    return UploadedImageResponse.model_validate(record)


@router.put("/{image_id}")
async def update_image(
    image_id: int,
    body: ImageUpdate,
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
) -> dict:
    require_authenticated(viewer)
    await images.update_image(db, image_id, viewer, body.model_dump(exclude_unset=True))
    return {"success": True}


@router.delete("/{image_id}")
async def delete_image(
    image_id: int,
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> dict:
    require_authenticated(viewer)
    await images.delete_image(db, image_id, viewer, settings.uploads_dir, settings.thumbs_dir)
    return {"success": True}


@router.post("/{image_id}/like")
async def like_image(
    image_id: int,
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Like an image. Liking twice is a no-op."""
    user_id = require_account(viewer, "Must be logged in to like")
    await images.like_image(db, image_id, user_id)
    return {"success": True}


@router.delete("/{image_id}/like")
async def unlike_image(
    image_id: int,
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
) -> dict:
    user_id = require_account(viewer, "Must be logged in to unlike")
    await images.unlike_image(db, image_id, user_id)
    return {"success": True}


@router.get("/{image_id}/comments", response_model=list[CommentResponse])
async def list_comments(image_id: int, db: AsyncSession = Depends(get_db)) -> list[dict]:
    return await comments.list_for_image(db, image_id)


@router.post("/{image_id}/comments", response_model=CommentResponse)
async def create_comment(
    image_id: int,
    body: CommentCreate,
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
) -> CommentResponse:
    """Post a comment, anonymously or as the logged-in user."""
    comment = await comments.create_comment(db, image_id, viewer, body.text, body.author_name)
    return CommentResponse.model_validate(comment)
