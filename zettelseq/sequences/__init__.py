"""Sequence addressing engine: parse, convert and allocate note addresses."""

from zettelseq.sequences.allocator import new_child, new_root, new_sibling
from zettelseq.sequences.codec import decode_letters, encode_letters, increment_letters
from zettelseq.sequences.collection import SequenceCollection, build_collection
from zettelseq.sequences.converter import convert
from zettelseq.sequences.relatives import Relation, get_relative
from zettelseq.sequences.splitter import is_valid, join, split

__all__ = [
    "Relation",
    "SequenceCollection",
    "build_collection",
    "convert",
    "decode_letters",
    "encode_letters",
    "get_relative",
    "increment_letters",
    "is_valid",
    "join",
    "new_child",
    "new_root",
    "new_sibling",
    "split",
]
