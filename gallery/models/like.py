"""Like model."""

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from gallery.db.base import Base


class Like(Base):
    """A user's like on an image. At most one per (user, image)."""

    __tablename__ = "likes"
    __table_args__ = (UniqueConstraint("user_id", "image_id", name="uq_likes_user_image"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, index=True)
    image_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("images.id", ondelete="CASCADE"),
        index=True,
    )
