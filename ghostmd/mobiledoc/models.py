"""
Mobiledoc 0.3 "wire" models.

Mobiledoc stores almost everything as positional arrays, e.g.
  - section: [1, "p", [markers...]]
  - marker:  [0, [open markup indices], close count, "text"]
  - markup:  ["a", ["href", "https://..."]]
  - card:    ["code", {"code": "...", "language": "python"}]

Each model accepts either the array form or a keyword mapping. Sections are a
discriminated union on their numeric tag; a section that cannot be validated
is kept as an InvalidSection so one bad block never rejects the document.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Any, Dict, Literal, Optional, Tuple, Type, Union

from pydantic import (
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

from ..exceptions import MissingAtomError, MissingCardError, MissingMarkupError
from .._base import GhostMdModel

LOGGER = logging.getLogger(__name__)

MARKUP_SECTION_TYPE = 1
IMAGE_SECTION_TYPE = 2
LIST_SECTION_TYPE = 3
CARD_SECTION_TYPE = 10

TEXT_MARKER_TYPE = 0
ATOM_MARKER_TYPE = 1


def _positional(data: Any, names: Tuple[str, ...]) -> Any:
    # Arrays map onto field names by position; mappings pass through untouched.
    if isinstance(data, (list, tuple)):
        return dict(zip(names, data))
    return data


# ---------------------------------------------------------------------------
# Lookup table records
# ---------------------------------------------------------------------------


class Markup(GhostMdModel):
    """Inline markup definition referenced by markers."""

    tag: str
    # Only string values are read back; anything else is ignored
    attributes: Tuple[Any, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        return _positional(data, ("tag", "attributes"))

    @field_validator("tag")
    @classmethod
    def _lower_tag(cls, v: str) -> str:
        return v.lower()

    def attribute(self, name: str) -> Optional[str]:
        # Attributes are a flat [key, value, key, value, ...] list
        attrs = self.attributes
        for i in range(0, len(attrs) - 1, 2):
            if attrs[i] == name:
                value = attrs[i + 1]
                return value if isinstance(value, str) else None
        return None

    @property
    def href(self) -> Optional[str]:
        return self.attribute("href")


class Card(GhostMdModel):
    name: str
    payload: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        return _positional(data, ("name", "payload"))

    @field_validator("payload", mode="before")
    @classmethod
    def _null_payload(cls, v: Any) -> Any:
        return {} if v is None else v


class Atom(GhostMdModel):
    name: str
    text: str = ""
    payload: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        return _positional(data, ("name", "text", "payload"))


# Card payloads are validated lazily, when the card is rendered.


class ImageCardPayload(GhostMdModel):
    src: str
    caption: Optional[str] = None


class EmbedCardPayload(GhostMdModel):
    url: Optional[str] = None
    html: Optional[str] = None
    type: Optional[str] = None


class HtmlCardPayload(GhostMdModel):
    html: str = ""


class CodeCardPayload(GhostMdModel):
    code: str
    language: Optional[str] = None


# ---------------------------------------------------------------------------
# Markers and sections
# ---------------------------------------------------------------------------


class Marker(GhostMdModel):
    """One fragment of a section's inline stream."""

    kind: int = TEXT_MARKER_TYPE
    open_markups: Tuple[int, ...] = ()
    close_count: int = 0
    # Text for text markers, an index into ``atoms`` for atom markers
    value: Union[str, int] = ""
    # Set when the wire marker was malformed; the renderer reports it
    error: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        data = _positional(data, ("kind", "open_markups", "close_count", "value"))
        if isinstance(data, dict) and "value" in data:
            value = data["value"]
            if isinstance(value, bool) or not isinstance(value, (str, int)):
                # Keep the markup bookkeeping, drop the unusable value
                data = dict(data, value="", error=f"Malformed marker value: {value!r}")
        return data

    @property
    def is_atom(self) -> bool:
        return self.kind == ATOM_MARKER_TYPE


def _lenient_markers(entries: Any) -> Any:
    # A marker that cannot be validated becomes an empty placeholder carrying
    # the reason, so its siblings still render.
    if not isinstance(entries, (list, tuple)):
        return entries
    out = []
    for i, entry in enumerate(entries):
        if isinstance(entry, Marker):
            out.append(entry)
            continue
        try:
            out.append(Marker.model_validate(entry))
        except ValidationError as e:
            reason = f"Malformed marker at index {i}: {e.errors()[0].get('msg')}"
            LOGGER.warning(reason)
            out.append(Marker(error=reason))
    return tuple(out)


class MarkupSection(GhostMdModel):
    kind: Literal[1] = MARKUP_SECTION_TYPE
    tag_name: str
    markers: Tuple[Marker, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        return _positional(data, ("kind", "tag_name", "markers"))

    @field_validator("markers", mode="before")
    @classmethod
    def _lenient(cls, v: Any) -> Any:
        return _lenient_markers(v)


class ImageSection(GhostMdModel):
    kind: Literal[2] = IMAGE_SECTION_TYPE
    src: str

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        return _positional(data, ("kind", "src"))


class ListSection(GhostMdModel):
    kind: Literal[3] = LIST_SECTION_TYPE
    tag_name: str
    items: Tuple[Tuple[Marker, ...], ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        return _positional(data, ("kind", "tag_name", "items"))

    @field_validator("items", mode="before")
    @classmethod
    def _lenient(cls, v: Any) -> Any:
        if not isinstance(v, (list, tuple)):
            return v
        return tuple(_lenient_markers(item) for item in v)


class CardSection(GhostMdModel):
    kind: Literal[10] = CARD_SECTION_TYPE
    card_index: int

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        return _positional(data, ("kind", "card_index"))


class InvalidSection(GhostMdModel):
    """Placeholder for a section that could not be parsed."""

    kind: Any = None
    raw: Any = None
    reason: str


_SECTION_TAGS: Dict[int, str] = {
    MARKUP_SECTION_TYPE: "markup",
    IMAGE_SECTION_TYPE: "image",
    LIST_SECTION_TYPE: "list",
    CARD_SECTION_TYPE: "card",
}


def _section_kind(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    if isinstance(value, dict):
        return value.get("kind")
    return getattr(value, "kind", None)


def _section_tag(value: Any) -> Optional[str]:
    kind = _section_kind(value)
    if isinstance(kind, bool) or not isinstance(kind, int):
        return None
    return _SECTION_TAGS.get(kind)


Section = Annotated[
    Union[
        Annotated[MarkupSection, Tag("markup")],
        Annotated[ImageSection, Tag("image")],
        Annotated[ListSection, Tag("list")],
        Annotated[CardSection, Tag("card")],
    ],
    Discriminator(_section_tag),
]

AnySection = Union[MarkupSection, ImageSection, ListSection, CardSection, InvalidSection]

_SECTION_ADAPTER: TypeAdapter = TypeAdapter(Section)
_SECTION_MODELS = (MarkupSection, ImageSection, ListSection, CardSection, InvalidSection)


def parse_section(raw: Any) -> AnySection:
    """Validate one wire section, degrading to InvalidSection instead of raising."""
    if isinstance(raw, _SECTION_MODELS):
        return raw
    kind = _section_kind(raw)
    if _section_tag(raw) is None:
        return InvalidSection(
            kind=kind, raw=raw, reason=f'Unexpected section type "{kind}"'
        )
    try:
        return _SECTION_ADAPTER.validate_python(raw)
    except ValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(p) for p in first.get("loc", ()))
        return InvalidSection(
            kind=kind,
            raw=raw,
            reason=f"Malformed section (kind {kind}): {loc}: {first.get('msg')}",
        )


def _lenient_table(model: Type[GhostMdModel], entries: Any, table: str) -> Any:
    # A broken table entry becomes None; lookups then fail for that index only.
    if entries is None:
        return ()
    if not isinstance(entries, (list, tuple)):
        return entries
    out = []
    for i, entry in enumerate(entries):
        if isinstance(entry, model):
            out.append(entry)
            continue
        try:
            out.append(model.model_validate(entry))
        except ValidationError as e:
            LOGGER.warning(
                "Ignoring malformed %s definition at index %d: %s",
                table,
                i,
                e.errors()[0].get("msg"),
            )
            out.append(None)
    return tuple(out)


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


class MobiledocDocument(GhostMdModel):
    """Root Mobiledoc value: lookup tables plus the ordered section list."""

    version: str = "0.3.1"
    atoms: Tuple[Optional[Atom], ...] = ()
    cards: Tuple[Optional[Card], ...] = ()
    markups: Tuple[Optional[Markup], ...] = ()
    sections: Tuple[AnySection, ...] = ()

    @field_validator("atoms", mode="before")
    @classmethod
    def _lenient_atoms(cls, v: Any) -> Any:
        return _lenient_table(Atom, v, "atom")

    @field_validator("cards", mode="before")
    @classmethod
    def _lenient_cards(cls, v: Any) -> Any:
        return _lenient_table(Card, v, "card")

    @field_validator("markups", mode="before")
    @classmethod
    def _lenient_markups(cls, v: Any) -> Any:
        return _lenient_table(Markup, v, "markup")

    @field_validator("sections", mode="before")
    @classmethod
    def _isolate_sections(cls, v: Any) -> Any:
        if v is None:
            return ()
        if not isinstance(v, (list, tuple)):
            return v
        return tuple(parse_section(s) for s in v)

    @classmethod
    def coerce(
        cls, value: Union["MobiledocDocument", Dict[str, Any], str, bytes]
    ) -> "MobiledocDocument":
        """Accept a parsed document, a mapping or a JSON string.

        Ghost stores ``mobiledoc`` as a JSON string on every post.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, (str, bytes, bytearray)):
            value = json.loads(value)
        return cls.model_validate(value)

    # Lookups raise so the enclosing unit (marker, card) can fail in isolation.

    def card(self, index: int) -> Card:
        found = _lookup(self.cards, index)
        if found is None:
            raise MissingCardError(index)
        return found

    def markup(self, index: int) -> Markup:
        found = _lookup(self.markups, index)
        if found is None:
            raise MissingMarkupError(index)
        return found

    def atom(self, index: int) -> Atom:
        found = _lookup(self.atoms, index)
        if found is None:
            raise MissingAtomError(index)
        return found


def _lookup(table: Tuple[Any, ...], index: Any) -> Any:
    if isinstance(index, bool) or not isinstance(index, int):
        return None
    if 0 <= index < len(table):
        return table[index]
    return None


__all__ = [
    "ATOM_MARKER_TYPE",
    "CARD_SECTION_TYPE",
    "IMAGE_SECTION_TYPE",
    "LIST_SECTION_TYPE",
    "MARKUP_SECTION_TYPE",
    "TEXT_MARKER_TYPE",
    "AnySection",
    "Atom",
    "Card",
    "CardSection",
    "CodeCardPayload",
    "EmbedCardPayload",
    "HtmlCardPayload",
    "ImageCardPayload",
    "ImageSection",
    "InvalidSection",
    "ListSection",
    "Markup",
    "MarkupSection",
    "Marker",
    "MobiledocDocument",
    "Section",
    "parse_section",
]
