"""
Database Models

Link is the only table: one row per short link, written once and never
updated. The unique index on code is what makes concurrent creates safe,
since collisions are detected by the insert itself.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, String, Text
from sqlmodel import Column, Field, SQLModel

# Shown on the preview page when the creator leaves the quote blank.
DEFAULT_QUOTE = "The journey of a thousand miles begins with a single click."


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Link(SQLModel, table=True):
    """
    A short code and the page it previews.

    Fields:
    - id: Auto-incrementing primary key
    - code: Unique random short code (6 characters by default)
    - url: The target URL the preview redirects to
    - title, description, image, quote: Preview metadata, empty when omitted
    - created_at: Insertion timestamp

    Indexes:
    - code: Unique index, used for every lookup
    """
    __tablename__ = "links"

    id: Optional[int] = Field(default=None, primary_key=True)
    code: str = Field(
        sa_column=Column(String(32), nullable=False, unique=True, index=True),
        max_length=32
    )
    url: str = Field(sa_column=Column(Text, nullable=False))
    title: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    description: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    image: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    quote: str = Field(default=DEFAULT_QUOTE, sa_column=Column(Text, nullable=False))
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )
