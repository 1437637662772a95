"""Spot model - a user-contributed point of interest on the map."""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Float, ForeignKey, Index, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from spotmap.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from spotmap.models.review import Review
    from spotmap.models.tag import Tag
    from spotmap.models.user import User


class Spot(Base, UUIDMixin, TimestampMixin):
    """A titled, tagged location whose rating is the mean of its reviews.

    The row plus its review links and reports form one document: every write
    to any of them goes through the store in a single commit that bumps
    ``version``, so a writer holding a stale copy fails instead of clobbering.
    """

    __tablename__ = "spots"
    __table_args__ = (Index("ix_spot_coordinates", "latitude", "longitude"),)

    title: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    creator_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    floor: Mapped[str] = mapped_column(String(3), nullable=False, default="1")
    tag_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tags.id"), nullable=False, index=True
    )
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version, "version_id_generator": False}

    # Relationships - links and reports are part of the document and always loaded
    review_links: Mapped[list["SpotReview"]] = relationship(
        "SpotReview",
        order_by="SpotReview.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    reports: Mapped[list["SpotReport"]] = relationship(
        "SpotReport",
        order_by="SpotReport.timestamp",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    # Hydrated references, loaded only on request
    creator: Mapped["User"] = relationship("User")
    tag: Mapped["Tag"] = relationship("Tag")
    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        secondary="spot_reviews",
        order_by="SpotReview.position",
        viewonly=True,
    )

    @property
    def location(self) -> dict[str, float]:
        """Coordinates as a ``{latitude, longitude}`` mapping."""
        return {"latitude": self.latitude, "longitude": self.longitude}

    @property
    def review_ids(self) -> list[uuid.UUID]:
        """Review references in insertion order."""
        return [link.review_id for link in self.review_links]

    @property
    def report_score(self) -> int:
        """Sum of the reputations recorded by every report so far."""
        return sum(report.reporter_score for report in self.reports)

    def has_reporter(self, user_id: uuid.UUID) -> bool:
        """Whether ``user_id`` already reported this spot."""
        return any(report.reporter_id == user_id for report in self.reports)

    def append_review(self, review_id: uuid.UUID) -> None:
        """Reference a review at the end of the list (persisted on next store write)."""
        self.review_links.append(
            SpotReview(review_id=review_id, position=len(self.review_links))
        )

    def append_report(self, reporter_id: uuid.UUID, reporter_score: int) -> None:
        """Record a report (persisted on next store write)."""
        self.reports.append(SpotReport(reporter_id=reporter_id, reporter_score=reporter_score))

    def __repr__(self) -> str:
        """String representation."""
        return f"<Spot(id={self.id}, title='{self.title}', rating={self.rating})>"


class SpotReview(Base):
    """Ordered reference from a spot to one of its reviews."""

    __tablename__ = "spot_reviews"

    spot_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("spots.id", ondelete="CASCADE"), primary_key=True
    )
    review_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("reviews.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)


class SpotReport(Base, UUIDMixin, TimestampMixin):
    """A user's report against a spot, weighted by their reputation at the time."""

    __tablename__ = "spot_reports"
    __table_args__ = (
        UniqueConstraint("spot_id", "reporter_id", name="uq_spot_report_reporter"),
    )

    spot_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("spots.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reporter_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    reporter_score: Mapped[int] = mapped_column(Integer, nullable=False)
