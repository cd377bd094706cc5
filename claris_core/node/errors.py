from __future__ import annotations


class NodeError(ValueError):
    """Raised when a scene document node does not describe a valid value."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class RequiredFieldError(NodeError):
    def __init__(self, context: str, field: str) -> None:
        super().__init__(context, field)
        self.context = context
        self.field = field

    def __str__(self) -> str:
        return f"'{self.context}' is required '{self.field}' option"


class InvalidColorError(NodeError):
    def __init__(self, raw: str) -> None:
        super().__init__(raw)
        self.raw = raw

    def __str__(self) -> str:
        return f"invalid color format '{self.raw}'"


class InvalidLayerError(NodeError):
    def __str__(self) -> str:
        return "invalid layers"


class InvalidLayerCountError(NodeError):
    def __str__(self) -> str:
        return "invalid layers count"


class InvalidLayerDefineError(NodeError):
    def __str__(self) -> str:
        return "invalid layer define"


class UnknownLayerError(NodeError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown layer type '{self.name}'"


class InvalidVertexError(NodeError):
    def __str__(self) -> str:
        return "invalid vertex"


class InvalidPointError(NodeError):
    def __str__(self) -> str:
        return "invalid point"
