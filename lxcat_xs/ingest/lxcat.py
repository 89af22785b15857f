"""
LXCat / BOLSIG Format Reader
============================

Parser for electron collision cross-section files in the LXCat (BOLSIG+)
text format.

Format Overview:
    - Line oriented, fields separated by whitespace
    - A process block starts with a line whose first token is one of
      ELASTIC, EFFECTIVE, EXCITATION, ATTACHMENT, IONIZATION, ROTATION
    - Every other line outside a block is commentary and is ignored
    - Energies in eV, cross sections in m^2

Block layout::

    EXCITATION
    Ar -> Ar*(11.5eV)
     1.150000e+1  1.0
    SPECIES: e / Ar
    PROCESS: E + Ar -> E + Ar*, Excitation
    -----------------------------
     1.150000e+1  0.000000e+0
     1.200000e+1  7.300000e-22
    -----------------------------

Line 3 holds the numeric parameters of the process:

    ============  =====================================================
    ELASTIC       mass ratio
    EFFECTIVE     mass ratio
    EXCITATION    threshold [eV], optional statistical weight ratio
    IONIZATION    threshold [eV]
    ATTACHMENT    (unused)
    ROTATION      lower energy, lower statistical weight; the next
                  non-empty line holds upper energy, upper stat. weight
    ============  =====================================================

``key: value`` lines up to the first separator are kept as block metadata;
the lines between the first and second separator are the (energy, cross
section) table.

Parsing Model:
    The input is read into a list of lines and walked with an explicit
    :class:`LineCursor`.  Each step (``parse_header``, ``parse_species``,
    ``parse_parameters``, ``parse_info``, ``parse_table``) takes a cursor and
    returns ``(fragment, new_cursor)`` or raises an
    :class:`~lxcat_xs.errors.LXCatFormatError`.  Loading is all-or-nothing:
    any error aborts the load and no partial collection is returned.

References:
    - LXCat: https://www.lxcat.net
    - BOLSIG+: Hagelaar & Pitchford, Plasma Sources Sci. Technol. 14 (2005) 722

Example:
    >>> collection = load_collection('data/Ar_Biagi.txt')
    >>> print(f"{len(collection)} processes for {collection.species}")
    >>> collection.total_cross_section_at(20.0)
"""

import logging
import os
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from lxcat_xs.data.collection import Collection
from lxcat_xs.data.collision import Collision, CrossSectionPoint, ProcessType
from lxcat_xs.errors import (
    EmptyCrossSectionError,
    MalformedNumberError,
    StructuralError,
    TruncatedBlockError,
)
from lxcat_xs.physics.threshold_constraint import enforce_threshold

logger = logging.getLogger(__name__)

SEPARATOR = '-----'


@dataclass
class LXCatReaderConfig:
    """Configuration for reading LXCat files.

    Attributes:
        encoding: Text encoding used when opening a file path.
        separator: Prefix of the lines that close the metadata and data
            sections of a block.
        warn_unsorted: Log a warning for tables whose energies are not
            strictly increasing.  Tables are never re-sorted.
    """

    encoding: str = 'utf-8'
    separator: str = SEPARATOR
    warn_unsorted: bool = True


@dataclass(frozen=True)
class LineCursor:
    """Position in a list of lines.  Advancing returns a new cursor."""

    lines: Tuple[str, ...]
    position: int = 0

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> 'LineCursor':
        return cls(tuple(line.rstrip('\r\n') for line in lines))

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.lines)

    @property
    def line_number(self) -> int:
        """1-based number of the current line."""
        return self.position + 1

    @property
    def current(self) -> str:
        return self.lines[self.position]

    def advance(self, n: int = 1) -> 'LineCursor':
        return LineCursor(self.lines, self.position + n)


@dataclass
class BlockContext:
    """What is known about the block being parsed, for error messages."""

    process: ProcessType
    species: Optional[str] = None
    start_line: int = 0

    def error_fields(self, section: str, cursor: LineCursor) -> dict:
        return {
            'process': self.process.value,
            'species': self.species,
            'section': section,
            'line_number': cursor.line_number,
        }


# ----------------------------------------------------------------------
# Step functions
# ----------------------------------------------------------------------

def _take_line(cursor: LineCursor, ctx: BlockContext, section: str) -> Tuple[str, LineCursor]:
    """Return the current line and the advanced cursor, or fail at end of input."""
    if cursor.at_end:
        raise TruncatedBlockError(
            f"Input ended inside {ctx.process.value} block started at line {ctx.start_line}",
            **ctx.error_fields(section, cursor),
        )
    return cursor.current, cursor.advance()


def _parse_float(token: str, role: str, cursor: LineCursor, ctx: BlockContext, section: str) -> float:
    try:
        return float(token)
    except ValueError:
        raise MalformedNumberError(token, role, **ctx.error_fields(section, cursor)) from None


def _numbers(
    line: str,
    roles: List[str],
    required: int,
    cursor: LineCursor,
    ctx: BlockContext,
    section: str,
) -> List[float]:
    """Parse the leading tokens of ``line`` as the numbers named in ``roles``.

    The first ``required`` roles must be present; the rest are optional.
    Tokens beyond ``len(roles)`` are ignored.
    """
    tokens = line.split()
    if len(tokens) < required:
        raise StructuralError(
            f"Expected {required} value(s) ({', '.join(roles[:required])}), "
            f"found {len(tokens)} in {line!r}",
            **ctx.error_fields(section, cursor),
        )
    return [
        _parse_float(token, role, cursor, ctx, section)
        for token, role in zip(tokens, roles)
    ]


def parse_header(cursor: LineCursor) -> Tuple[Optional[ProcessType], LineCursor]:
    """Recognise a block header at the cursor.

    Returns:
        (process, cursor after the line); process is None when the line is
        not a header.
    """
    tokens = cursor.current.split()
    process = ProcessType.from_keyword(tokens[0]) if tokens else None
    return process, cursor.advance()


def parse_species(cursor: LineCursor, ctx: BlockContext) -> Tuple[str, LineCursor]:
    """Species is the first token of the line after the header."""
    here = cursor
    line, cursor = _take_line(cursor, ctx, 'species')
    tokens = line.split()
    if not tokens:
        raise StructuralError("Missing species line", **ctx.error_fields('species', here))
    return tokens[0], cursor


def parse_parameters(cursor: LineCursor, ctx: BlockContext) -> Tuple[Dict[str, float], LineCursor]:
    """Numeric parameters of the block, interpreted by process type."""
    here = cursor
    line, cursor = _take_line(cursor, ctx, 'parameters')
    process = ctx.process

    if process in (ProcessType.ELASTIC, ProcessType.EFFECTIVE):
        (mass_ratio,) = _numbers(line, ['mass_ratio'], 1, here, ctx, 'parameters')
        return {'mass_ratio': mass_ratio}, cursor

    if process is ProcessType.EXCITATION:
        values = _numbers(line, ['threshold', 'stat_weight_ratio'], 1, here, ctx, 'parameters')
        params = {'threshold': values[0], 'stat_weight_ratio': 1.0}
        if len(values) > 1:
            params['stat_weight_ratio'] = values[1]
        return params, cursor

    if process is ProcessType.IONIZATION:
        (threshold,) = _numbers(line, ['threshold'], 1, here, ctx, 'parameters')
        return {'threshold': threshold}, cursor

    if process is ProcessType.ROTATION:
        lower_energy, lower_weight = _numbers(
            line, ['lower_energy', 'lower_stat_weight'], 2, here, ctx, 'parameters'
        )
        while not cursor.at_end and not cursor.current.strip():
            cursor = cursor.advance()
        here = cursor
        line, cursor = _take_line(cursor, ctx, 'parameters')
        upper_energy, upper_weight = _numbers(
            line, ['upper_energy', 'upper_stat_weight'], 2, here, ctx, 'parameters'
        )
        return {
            'lower_energy': lower_energy,
            'lower_stat_weight': lower_weight,
            'upper_energy': upper_energy,
            'upper_stat_weight': upper_weight,
        }, cursor

    if process is ProcessType.ATTACHMENT:
        return {}, cursor

    raise AssertionError(f"Unhandled process type {process!r}")


def parse_info(
    cursor: LineCursor,
    ctx: BlockContext,
    separator: str = SEPARATOR,
) -> Tuple[Dict[str, str], LineCursor]:
    """``key: value`` lines up to and including the first separator."""
    info: Dict[str, str] = {}
    while True:
        line, cursor = _take_line(cursor, ctx, 'info')
        if line.startswith(separator):
            return info, cursor
        key, colon, value = line.partition(':')
        if colon:
            info[key.strip()] = value.strip()


def parse_table(
    cursor: LineCursor,
    ctx: BlockContext,
    separator: str = SEPARATOR,
) -> Tuple[List[CrossSectionPoint], LineCursor]:
    """(energy, cross section) rows up to and including the closing separator."""
    points: List[CrossSectionPoint] = []
    while True:
        here = cursor
        line, cursor = _take_line(cursor, ctx, 'data')
        if line.startswith(separator):
            return points, cursor
        energy, value = _numbers(line, ['energy', 'cross_section'], 2, here, ctx, 'data')
        points.append(CrossSectionPoint(energy, value))


def _is_sorted(points: List[CrossSectionPoint]) -> bool:
    return all(a.energy < b.energy for a, b in zip(points, points[1:]))


def parse_block(
    cursor: LineCursor,
    config: Optional[LXCatReaderConfig] = None,
) -> Tuple[Collision, LineCursor]:
    """Parse one process block whose header is at the cursor.

    Raises:
        StructuralError: If the cursor is not on a block header
        LXCatFormatError: For any malformed part of the block
    """
    if config is None:
        config = LXCatReaderConfig()

    header = cursor
    process, cursor = parse_header(cursor)
    if process is None:
        raise StructuralError(
            f"Not a process block header: {header.current!r}",
            section='header',
            line_number=header.line_number,
        )

    ctx = BlockContext(process=process, start_line=header.line_number)
    ctx.species, cursor = parse_species(cursor, ctx)
    params, cursor = parse_parameters(cursor, ctx)
    info, cursor = parse_info(cursor, ctx, config.separator)
    table_start = cursor
    points, cursor = parse_table(cursor, ctx, config.separator)

    if config.warn_unsorted and not _is_sorted(points):
        logger.warning(f"{process.value} {ctx.species} (line {ctx.start_line}): "
                       f"energies are not strictly increasing")

    try:
        data = enforce_threshold(process, points, params.get('threshold', 0.0))
    except EmptyCrossSectionError as exc:
        raise exc.with_context(
            species=ctx.species,
            section='data',
            line_number=table_start.line_number,
        ) from None

    collision = Collision(
        process=process,
        species=ctx.species,
        data=data,
        info=info,
        **params,
    )
    logger.debug(f"Parsed {collision} ({len(data)} points, line {ctx.start_line})")
    return collision, cursor


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

class LXCatReader:
    """
    Reader for LXCat/BOLSIG cross-section files.

    Attributes:
        config: Reader configuration

    Example:
        >>> reader = LXCatReader()
        >>> collection = reader.read('data/N2_Phelps.txt')
        >>> ionization = collection.of_kind(ProcessType.IONIZATION)
    """

    def __init__(self, config: Optional[LXCatReaderConfig] = None):
        self.config = config or LXCatReaderConfig()

    def read(self, source: Union[str, os.PathLike, Iterable[str]]) -> Collection:
        """
        Load every process block from ``source``.

        Args:
            source: Path to an LXCat file, or an open text stream / iterable
                of lines

        Returns:
            Collection of collisions in file order

        Raises:
            FileNotFoundError: If a path does not exist
            LXCatFormatError: If the content is malformed
        """
        if isinstance(source, (str, os.PathLike)):
            path = Path(source)
            if not path.exists():
                raise FileNotFoundError(f"LXCat file not found: {path}")
            with open(path, 'r', encoding=self.config.encoding) as f:
                lines = list(f)
            return self.parse_lines(lines, source_name=str(path))

        name = getattr(source, 'name', '<stream>')
        return self.parse_lines(list(source), source_name=str(name))

    def parse_lines(self, lines: Iterable[str], source_name: str = '<lines>') -> Collection:
        """Parse already-split lines."""
        cursor = LineCursor.from_lines(lines)
        collisions: List[Collision] = []

        while not cursor.at_end:
            process, _ = parse_header(cursor)
            if process is None:
                cursor = cursor.advance()
                continue
            collision, cursor = parse_block(cursor, self.config)
            collisions.append(collision)

        collection = Collection(collisions)
        counts = Counter(c.process.value for c in collisions)
        logger.info(f"Loaded {len(collection)} collisions for {collection.species} "
                    f"from {source_name}")
        logger.debug(f"Process counts: {dict(counts)}")
        return collection


def parse_lines(
    lines: Iterable[str],
    config: Optional[LXCatReaderConfig] = None,
    source_name: str = '<lines>',
) -> Collection:
    """Parse LXCat content given as a sequence of lines."""
    return LXCatReader(config).parse_lines(lines, source_name=source_name)


def parse_lxcat(text: str, config: Optional[LXCatReaderConfig] = None) -> Collection:
    """Parse LXCat content held in a string."""
    return parse_lines(text.splitlines(), config, source_name='<string>')


def load_collection(
    source: Union[str, os.PathLike, Iterable[str]],
    config: Optional[LXCatReaderConfig] = None,
) -> Collection:
    """
    Load cross sections from an LXCat/BOLSIG file.

    Convenience wrapper around :class:`LXCatReader`.

    Args:
        source: Path to the file, or an open text stream
        config: Reader configuration (defaults if None)

    Returns:
        Collection of collisions in file order

    Example:
        >>> collection = load_collection('data/Ar_Biagi.txt')
        >>> collection[0].describe()
        'Cross section of Ar elastic. Threshold: 0'
    """
    return LXCatReader(config).read(source)
