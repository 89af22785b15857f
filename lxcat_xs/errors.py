"""
LXCat Loading Errors
====================

Exceptions raised while turning LXCat/BOLSIG text into a Collection.

All of them derive from ``ValueError`` so callers that only care about "bad
input" can catch that.  I/O problems are not wrapped: a missing file raises
the built-in ``FileNotFoundError`` before any parsing starts.

Hierarchy:
    LXCatFormatError
    ├── MalformedNumberError     numeric field failed to parse
    └── StructuralError          block shape is not what the format requires
        ├── TruncatedBlockError  input ended inside a block
        └── EmptyCrossSectionError  no data left after threshold filtering
"""

from typing import Optional


class LXCatFormatError(ValueError):
    """Base class for malformed LXCat input.

    Attributes:
        line_number: 1-based line number where the problem was found
        process: Process keyword of the enclosing block, if known
        species: Species of the enclosing block, if known
        section: Part of the block being read ('header', 'species',
            'parameters', 'info', 'data')
    """

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        process: Optional[str] = None,
        species: Optional[str] = None,
        section: Optional[str] = None,
    ):
        self.message = message
        self.line_number = line_number
        self.process = process
        self.species = species
        self.section = section
        super().__init__(self._format())

    def _format(self) -> str:
        context = []
        if self.process:
            context.append(f"process={self.process}")
        if self.species:
            context.append(f"species={self.species}")
        if self.section:
            context.append(f"section={self.section}")
        if self.line_number is not None:
            context.append(f"line {self.line_number}")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"

    def with_context(self, **context) -> 'LXCatFormatError':
        """Return a copy with missing context fields filled in."""
        fields = {
            'line_number': self.line_number,
            'process': self.process,
            'species': self.species,
            'section': self.section,
        }
        for key, value in context.items():
            if fields.get(key) is None:
                fields[key] = value
        return self._rebuild(**fields)

    def _rebuild(self, **fields) -> 'LXCatFormatError':
        return type(self)(self.message, **fields)


class MalformedNumberError(LXCatFormatError):
    """A field expected to be a number could not be parsed.

    Attributes:
        token: The offending text
        role: What the number was supposed to be (e.g. 'threshold', 'energy')
    """

    def __init__(self, token: str, role: str, **context):
        self.token = token
        self.role = role
        super().__init__(f"Cannot parse {role} from {token!r}", **context)

    def _rebuild(self, **fields) -> 'MalformedNumberError':
        return type(self)(self.token, self.role, **fields)


class StructuralError(LXCatFormatError):
    """A process block does not have the shape the format requires."""


class TruncatedBlockError(StructuralError):
    """Input ended before the block's closing separator."""


class EmptyCrossSectionError(StructuralError):
    """A block has no cross-section points (possibly after threshold filtering)."""
