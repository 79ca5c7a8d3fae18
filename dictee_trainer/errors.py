"""Exceptions raised by document import and remote text synthesis."""
from __future__ import annotations

ACCEPTED_FORMATS = (".txt", ".docx", ".doc", ".odt", ".pdf")


class DocumentError(Exception):
    """Base class for failures while reading an uploaded document."""


class UnsupportedFormat(DocumentError):
    def __init__(self, extension: str, accepted: tuple[str, ...] = ACCEPTED_FORMATS):
        self.extension = extension
        self.accepted = accepted
        shown = extension or "(aucune extension)"
        super().__init__(
            f"Format non supporté : {shown}. "
            "Formats acceptés : .txt, .docx/.doc, .odt, .pdf"
        )


class InvalidDocument(DocumentError):
    """The file could not be opened or its content entry is missing/unparseable."""


class RemoteSynthesisFailure(Exception):
    """Transport, auth, timeout or empty-response failure of the remote generator.

    Never reaches the user: the remote adapter catches it and falls back to
    local synthesis.
    """
