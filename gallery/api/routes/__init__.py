"""API router."""

from fastapi import APIRouter

from gallery.api.routes import admin, albums, auth, comments, files, images, users

router = APIRouter()

router.include_router(auth.router, tags=["auth"])
router.include_router(albums.router, prefix="/albums", tags=["albums"])
router.include_router(images.router, prefix="/images", tags=["images"])
router.include_router(comments.router, prefix="/comments", tags=["comments"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(users.router, prefix="/user", tags=["user"])

# Served outside the /api prefix
files_router = files.router
