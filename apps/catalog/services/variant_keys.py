"""
Canonical keys for variant option assignments.

A key identifies one assignment of values to option axes, independent of the
order the pairs were given in:

    canonical_key([('Size', 'M'), ('Color', 'Red')]) == 'Color:Red|Size:M'

Freshly generated combinations and persisted variants must go through the
same function so their keys compare equal.
"""

from operator import attrgetter
from typing import Iterable, List, Mapping, NamedTuple, Optional, Tuple, Union

PAIR_SEPARATOR = '|'
VALUE_SEPARATOR = ':'


class OptionPair(NamedTuple):
    """One (axis name, value) assignment, e.g. ('Color', 'Red')."""
    axis_name: str
    value: str


PairLike = Union[OptionPair, Tuple[str, str]]


def canonical_key(pairs: Iterable[PairLike]) -> str:
    """
    Serialize an option assignment into its canonical key.

    Pairs are sorted by axis name only, with plain ``str`` ordering
    (code points, never locale collation). Axis names must be unique
    within one assignment.
    """
    ordered = sorted((OptionPair(*pair) for pair in pairs), key=attrgetter('axis_name'))
    return PAIR_SEPARATOR.join(
        f"{pair.axis_name}{VALUE_SEPARATOR}{pair.value}" for pair in ordered
    )


def pairs_from_selection(selected_options: Optional[Mapping[str, str]]) -> List[OptionPair]:
    """Convert an ``{axis name: value}`` mapping into option pairs."""
    if selected_options is None:
        raise TypeError('selected_options must be a mapping, not None')
    return [OptionPair(axis_name, value) for axis_name, value in selected_options.items()]


def parse_key(key: str) -> List[OptionPair]:
    """
    Split a key produced by ``canonical_key`` back into pairs.

    Each segment is split on its first ':' so values may contain colons.
    """
    if not key:
        return []

    pairs = []
    for segment in key.split(PAIR_SEPARATOR):
        axis_name, separator, value = segment.partition(VALUE_SEPARATOR)
        if not separator:
            raise ValueError(f"Malformed option key segment: {segment!r}")
        pairs.append(OptionPair(axis_name, value))
    return pairs
