from typing import Dict, Hashable, List, Optional, Sequence, Tuple

from codec import decode, encode
from huffman import HuffmanNode, build_frequency_table, build_tree, generate_codes
from stats import CompressionStats, compute_stats


class NoCompressionError(RuntimeError):
    """Raised when decompressing a session that has not compressed anything."""


class HuffmanSession:
    """Caller-owned state of one compress/decompress pair.

    Decoding needs the exact tree that produced the encoding, so the
    session keeps it together with everything derived from the same input.
    Every :meth:`compress` call rebuilds all of it from scratch.

    :ivar source: The last compressed input, or ``None``.
    :type source: Sequence | None
    :ivar frequencies: Frequency table of ``source``.
    :type frequencies: Dict[Hashable, int]
    :ivar tree: Huffman tree built from ``frequencies``.
    :type tree: HuffmanNode | None
    :ivar codebook: Codes generated from ``tree``.
    :type codebook: Dict[Hashable, str]
    :ivar encoded: Encoded bit-string of ``source``.
    :type encoded: str
    :ivar decoded: Result of the last :meth:`decompress`, or ``None``.
    :type decoded: Sequence | None
    :ivar stats: Metrics of the last compression, or ``None``.
    :type stats: CompressionStats | None
    """

    def __init__(self):
        self.clear()

    def clear(self):
        """Forget the current input and everything derived from it."""
        self.source: Optional[Sequence] = None
        self.frequencies: Dict[Hashable, int] = {}
        self.tree: Optional[HuffmanNode] = None
        self.codebook: Dict[Hashable, str] = {}
        self.encoded = ""
        self.decoded: Optional[Sequence] = None
        self.stats: Optional[CompressionStats] = None

    @property
    def compressed(self) -> bool:
        """Whether :meth:`compress` has been called since the last clear.

        :returns: ``True`` if the session holds a compressed input.
        :rtype: bool
        """
        return self.source is not None

    def compress(self, source: Sequence) -> "HuffmanSession":
        """Build the frequency table, tree and codebook and encode ``source``.

        Clears the result of any earlier :meth:`decompress`.

        :param source: Symbols to compress (``str``, ``bytes`` or a list).
        :type source: Sequence
        :returns: This session.
        :rtype: HuffmanSession
        """
        self.source = source
        self.frequencies = build_frequency_table(source)
        self.tree = build_tree(self.frequencies)
        self.codebook = generate_codes(self.tree)
        self.encoded = encode(source, self.codebook)
        self.stats = compute_stats(source, self.encoded)
        self.decoded = None
        return self

    def decompress(self, strict: bool = False) -> Sequence:
        """Decode :attr:`encoded` with the retained tree.

        The result has the type of the source: ``str`` for text, ``bytes``
        for bytes, a list otherwise.

        :param bool strict: Passed to :func:`codec.decode`.
        :returns: The decoded sequence.
        :rtype: Sequence
        :raises NoCompressionError: If nothing has been compressed yet.
        :raises codec.MalformedBitStringError: In strict mode, if
                                               :attr:`encoded` is malformed.
        """
        if not self.compressed:
            raise NoCompressionError("Nothing has been compressed yet")
        symbols = decode(self.encoded, self.tree, strict=strict)
        if isinstance(self.source, str):
            self.decoded = "".join(symbols)
        elif isinstance(self.source, (bytes, bytearray)):
            self.decoded = bytes(symbols)
        else:
            self.decoded = symbols
        return self.decoded

    def verify(self) -> bool:
        """Return ``True`` if the last decompression reproduced the source."""
        return self.decoded is not None and self.decoded == self.source

    def frequency_rows(self) -> List[Tuple[Hashable, int]]:
        """Frequency table rows, most frequent first.

        Equal counts keep first-occurrence order.
        """
        return sorted(self.frequencies.items(), key=lambda kv: -kv[1])

    def code_rows(self) -> List[Tuple[Hashable, str]]:
        """Codebook rows, shortest code first, then by code."""
        return sorted(self.codebook.items(), key=lambda kv: (len(kv[1]), kv[1]))
