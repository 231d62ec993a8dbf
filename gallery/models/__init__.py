# Models module

from gallery.models.album import Album
from gallery.models.comment import Comment
from gallery.models.image import Image
from gallery.models.like import Like
from gallery.models.login_session import LoginSession
from gallery.models.user import User

__all__ = [
    "Album",
    "Comment",
    "Image",
    "Like",
    "LoginSession",
    "User",
]
