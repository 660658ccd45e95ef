"""Convert addresses between the numeric and alphanumeric schemes."""

from loguru import logger

from zettelseq.domain.sequence import Scheme, Sequence

from .codec import decode_letters, encode_letters, is_letters
from .splitter import join, split


def convert(sequence: Sequence | str, target: Scheme) -> str:
    """Re-express a sequence under another scheme.

    Component values are preserved: ``1=27=2=55`` becomes ``1za2zzc`` and
    back again. Digit components are copied verbatim, but a component moved
    into letter form keeps only its value, so ``1=01`` becomes ``1a`` and
    converts back as ``1=1``. A numeric ``0`` at a letter position has no
    letter form and raises InvalidComponent.

    Args:
        sequence: A parsed sequence, or an address string written in the
            scheme opposite to ``target``
        target: Scheme to convert into

    Returns:
        The address string under ``target``

    Raises:
        MalformedSequence: If a string input does not parse under the source scheme
        InvalidComponent: If a letter component is not in canonical form, or
            a ``0`` component would have to be written with letters
    """
    if isinstance(sequence, str):
        sequence = split(target.other, sequence)

    if sequence.scheme is target:
        return sequence.address

    if target is Scheme.ALPHANUMERIC:
        components = [
            encode_letters(int(component)) if index % 2 == 1 else component
            for index, component in enumerate(sequence.components)
        ]
    else:
        components = [
            str(decode_letters(component)) if is_letters(component) else component
            for component in sequence.components
        ]

    converted = join(target, components)
    logger.debug(f"Converted {sequence.address} to {converted} ({target.value})")
    return converted
