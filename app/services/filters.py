"""
Composable list filters.

Each predicate is a small immutable object that contributes one bound
SQLAlchemy clause; a FilterSet ANDs them together. Values always travel as
bind parameters, never as SQL text.

Example:
    filters = FilterSet()
    filters.add(StatusIs(ArtworkStatus.approved))
    filters.add(HasTag("Abstract"))
    query = filters.apply(select(Artworks))
"""

from dataclasses import dataclass, field
from typing import Any, Protocol

from sqlalchemy import ColumnElement, Select, and_, false, or_, select

from app.config import ArtworkStatus
from app.models import Artworks, ArtworkTags, Galleries, GalleryArtworks, Tags


class Predicate(Protocol):
    def clause(self) -> ColumnElement[bool]: ...


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass(frozen=True)
class StatusIs:
    status: ArtworkStatus

    def clause(self) -> ColumnElement[bool]:
        return Artworks.status == self.status  # type: ignore[return-value]


@dataclass(frozen=True)
class ArtistIs:
    artist_id: int

    def clause(self) -> ColumnElement[bool]:
        return Artworks.artist_id == self.artist_id  # type: ignore[return-value]


@dataclass(frozen=True)
class MediumIs:
    medium: str

    def clause(self) -> ColumnElement[bool]:
        return Artworks.medium == self.medium  # type: ignore[return-value]


@dataclass(frozen=True)
class ReviewedBy:
    """Artwork was approved or rejected by this curator."""

    curator_id: int

    def clause(self) -> ColumnElement[bool]:
        return and_(
            Artworks.curator_id == self.curator_id,  # type: ignore[arg-type]
            Artworks.status != ArtworkStatus.pending,  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class HasTag:
    """Artwork carries a tag with exactly this name."""

    name: str

    def clause(self) -> ColumnElement[bool]:
        tagged = (
            select(ArtworkTags.artwork_id)
            .join(Tags, Tags.tag_id == ArtworkTags.tag_id)  # type: ignore[arg-type]
            .where(Tags.name == self.name)  # type: ignore[arg-type]
        )
        return Artworks.artwork_id.in_(tagged)  # type: ignore[union-attr]


@dataclass(frozen=True)
class TextSearch:
    """
    Case-insensitive substring match over any of ``columns``.

    The query being filtered must already select from (or join) every
    table the columns belong to.
    """

    term: str
    columns: tuple[Any, ...] = field(default=())

    def clause(self) -> ColumnElement[bool]:
        if not self.columns:
            return false()
        pattern = f"%{escape_like(self.term)}%"
        return or_(*(column.ilike(pattern, escape="\\") for column in self.columns))


@dataclass(frozen=True)
class PublishedOnly:
    def clause(self) -> ColumnElement[bool]:
        return Galleries.is_published == True  # type: ignore[return-value]  # noqa: E712


@dataclass(frozen=True)
class CuratorIs:
    curator_id: int

    def clause(self) -> ColumnElement[bool]:
        return Galleries.curator_id == self.curator_id  # type: ignore[return-value]


@dataclass(frozen=True)
class GalleryHasTag:
    """At least one member artwork of the gallery carries this tag."""

    name: str

    def clause(self) -> ColumnElement[bool]:
        tagged = (
            select(GalleryArtworks.gallery_id)
            .join(ArtworkTags, ArtworkTags.artwork_id == GalleryArtworks.artwork_id)  # type: ignore[arg-type]
            .join(Tags, Tags.tag_id == ArtworkTags.tag_id)  # type: ignore[arg-type]
            .where(Tags.name == self.name)  # type: ignore[arg-type]
        )
        return Galleries.gallery_id.in_(tagged)  # type: ignore[union-attr]


class FilterSet:
    """An AND-composition of predicates."""

    def __init__(self, *predicates: Predicate) -> None:
        self._predicates: list[Predicate] = list(predicates)

    def add(self, predicate: Predicate) -> "FilterSet":
        self._predicates.append(predicate)
        return self

    def __len__(self) -> int:
        return len(self._predicates)

    def __iter__(self):
        return iter(self._predicates)

    def clause(self) -> ColumnElement[bool] | None:
        if not self._predicates:
            return None
        return and_(*(predicate.clause() for predicate in self._predicates))

    def apply(self, query: Select) -> Select:
        """Attach every predicate to ``query`` as a WHERE clause."""
        clause = self.clause()
        if clause is None:
            return query
        return query.where(clause)
