from typing import NamedTuple, Sized

BITS_PER_SYMBOL = 8  #: Baseline width of an uncompressed symbol


class CompressionStats(NamedTuple):
    """Size metrics of one compression.

    :ivar original_bits: Input length times :data:`BITS_PER_SYMBOL`.
    :ivar compressed_bits: Length of the encoded bit-string.
    :ivar ratio_percent: Share of bits saved, negative if the code expands
                         the input, ``0.0`` for empty input.
    :ivar saved_bits: Bits saved, never below zero.
    """

    original_bits: int
    compressed_bits: int
    ratio_percent: float
    saved_bits: int


def compute_stats(original: Sized, bits: Sized) -> CompressionStats:
    """Compute size and ratio metrics for an input and its encoding.

    :param original: The symbol sequence that was encoded.
    :type original: Sized
    :param bits: The encoded bit-string.
    :type bits: Sized
    :returns: The computed metrics.
    :rtype: CompressionStats
    """
    original_bits = len(original) * BITS_PER_SYMBOL
    compressed_bits = len(bits)
    if original_bits > 0:
        ratio = (original_bits - compressed_bits) / original_bits * 100
    else:
        ratio = 0.0
    return CompressionStats(
        original_bits=original_bits,
        compressed_bits=compressed_bits,
        ratio_percent=ratio,
        saved_bits=max(0, original_bits - compressed_bits),
    )
