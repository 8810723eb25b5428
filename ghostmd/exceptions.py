"""Library exceptions."""

from typing import Optional


class GhostMdError(Exception):
    """Base ghostmd error."""


# ------------------------------ Mobiledoc ------------------------------------


class MobiledocError(GhostMdError):
    """Structural problem inside a Mobiledoc document."""


class UnknownSectionError(MobiledocError):
    """Section tag is not one of the supported Mobiledoc section kinds."""

    def __init__(self, kind: object, reason: Optional[str] = None):
        super().__init__(reason or f'Unexpected section type "{kind}"')
        self.kind = kind


class _MissingDefinition(MobiledocError):
    table = "definition"

    def __init__(self, index: object):
        super().__init__(f"No {self.table} definition found at index {index}")
        self.index = index


class MissingCardError(_MissingDefinition):
    table = "card"


class MissingMarkupError(_MissingDefinition):
    table = "markup"


class MissingAtomError(_MissingDefinition):
    table = "atom"


# ------------------------------- Sources -------------------------------------


class PostSourceError(GhostMdError):
    """Posts could not be loaded from the source."""


class PostNotFound(PostSourceError):
    """No post with the requested slug."""
