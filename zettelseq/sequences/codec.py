"""Numeral systems for individual sequence components.

Numeric components are plain decimal integers. Letter components use a
run-length style system: values 1-26 are ``a``-``z``, and every further
block of 26 prepends one more ``z`` (27 is ``za``, 52 is ``zz``, 53 is
``zza``). Only strings of the form ``z*[a-z]`` are canonical.
"""

import re
import string

from zettelseq.domain.errors import InvalidComponent

ALPHABET = string.ascii_lowercase
ALPHABET_SIZE = len(ALPHABET)

_LETTERS_PATTERN = re.compile(r"[a-z]+")
_CANONICAL_LETTERS_PATTERN = re.compile(r"z*[a-z]")


def encode_letters(n: int) -> str:
    """Encode a positive integer as a canonical letter component.

    Args:
        n: 1-based component value

    Returns:
        ``(L-1)`` repetitions of ``z`` followed by the final letter
    """
    if n < 1:
        raise InvalidComponent(n, "letter components start at 1")
    length = (n - 1) // ALPHABET_SIZE + 1
    value = (n - 1) % ALPHABET_SIZE
    return "z" * (length - 1) + ALPHABET[value]


def decode_letters(letters: str) -> int:
    """Decode a canonical letter component back to its integer value.

    Raises:
        InvalidComponent: If ``letters`` is empty, contains anything but
            lowercase letters, or has a non-final character other than ``z``
    """
    if not letters:
        raise InvalidComponent(letters, "empty letter component")
    if not _LETTERS_PATTERN.fullmatch(letters):
        raise InvalidComponent(letters, "only lowercase letters a-z are allowed")
    if not _CANONICAL_LETTERS_PATTERN.fullmatch(letters):
        raise InvalidComponent(letters, "every letter before the last must be 'z'")
    return ALPHABET_SIZE * (len(letters) - 1) + ALPHABET.index(letters[-1]) + 1


def increment_letters(letters: str) -> str:
    """Return the letter component that follows ``letters``.

    Works on any letter string, canonical or not: the last letter is bumped,
    and a trailing ``z`` grows the string by one ``a`` instead of carrying.
    """
    if not letters or not _LETTERS_PATTERN.fullmatch(letters):
        raise InvalidComponent(letters, "not a letter component")
    last = letters[-1]
    if last == "z":
        return letters + "a"
    return letters[:-1] + ALPHABET[ALPHABET.index(last) + 1]


def increment_number(digits: str) -> str:
    return str(int(digits) + 1)


def is_letters(component: str) -> bool:
    return bool(_LETTERS_PATTERN.fullmatch(component))


def component_key(component: str) -> tuple[int, int | str]:
    """Sort key comparing components by the value they denote.

    Numbers compare by integer value. Letters compare by length first and
    then alphabetically, which matches decoded order for canonical strings
    and still gives a total order over non-canonical ones.
    """
    if is_letters(component):
        return len(component), component
    return 0, int(component)


def successor(component: str) -> str:
    if is_letters(component):
        return increment_letters(component)
    return increment_number(component)
