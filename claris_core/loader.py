from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .node.document import MappingDocument


LOGGER = logging.getLogger(__name__)


class LoadError(RuntimeError):
    """Raised when a scene source cannot be turned into a document tree."""


class OpenError(LoadError):
    def __init__(self, path: str) -> None:
        super().__init__(f"file open error! path: '{path}'")
        self.path = path


class ReadError(LoadError):
    def __init__(self, path: str) -> None:
        super().__init__(f"file read error! path: '{path}'")
        self.path = path


class ParseError(LoadError):
    def __init__(self, path: str) -> None:
        super().__init__(f"invalid yaml format! path: '{path}'")
        self.path = path


class NoEntryError(LoadError):
    def __init__(self) -> None:
        super().__init__("yaml has no entry!")


class TooManyEntryError(LoadError):
    def __init__(self) -> None:
        super().__init__("yaml has too many entry!")


class SourceLoader:
    """Reads a single-document YAML scene source into a MappingDocument."""

    @staticmethod
    def load(path: str | Path) -> MappingDocument:
        src = Path(path)
        try:
            f = src.open("r", encoding="utf-8")
        except OSError as exc:
            raise OpenError(str(src)) from exc
        with f:
            try:
                text = f.read()
            except (OSError, UnicodeDecodeError) as exc:
                raise ReadError(str(src)) from exc
        return SourceLoader.load_string(text, source=str(src))

    @staticmethod
    def load_string(text: str, *, source: str = "<string>") -> MappingDocument:
        try:
            docs = list(yaml.safe_load_all(text))
        except yaml.YAMLError as exc:
            raise ParseError(source) from exc
        if not docs:
            raise NoEntryError()
        if len(docs) > 1:
            raise TooManyEntryError()
        LOGGER.debug("loaded scene source %s", source)
        return MappingDocument(docs[0])
