# Services module

from gallery.services.ingestion import IngestionPipeline, UploadFields
from gallery.services.thumbnails import ThumbnailGenerator
from gallery.services.visibility import Access, AccessDecision, VisibilityPolicy

__all__ = [
    "Access",
    "AccessDecision",
    "IngestionPipeline",
    "ThumbnailGenerator",
    "UploadFields",
    "VisibilityPolicy",
]
