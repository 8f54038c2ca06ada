import heapq
from collections import Counter
from typing import Dict, Hashable, Iterable, List, Optional, Tuple


def build_frequency_table(sequence: Iterable[Hashable]) -> Counter:
    """Count occurrences of every distinct symbol in ``sequence``.

    Keys keep the order of their first occurrence, which is the order
    leaves are queued in by :func:`build_tree`.

    :param sequence: Symbols to count (a ``str`` yields characters,
                     ``bytes`` yields ints).
    :type sequence: Iterable[Hashable]
    :returns: Mapping from symbol to its count. Empty for empty input.
    :rtype: collections.Counter
    """
    return Counter(sequence)


class HuffmanNode:
    """Immutable node of a binary Huffman tree.

    A leaf holds a symbol and its count and has no children. An internal
    node holds no symbol, exactly two children and the sum of their
    frequencies.

    :ivar symbol: The symbol stored at a leaf; ``None`` for internal nodes.
    :type symbol: Hashable | None
    :ivar freq: Frequency (weight) of the subtree rooted at this node.
    :type freq: int
    :ivar left: Left child node (the ``0`` branch).
    :type left: HuffmanNode | None
    :ivar right: Right child node (the ``1`` branch).
    :type right: HuffmanNode | None
    """

    __slots__ = ("symbol", "freq", "left", "right")

    def __init__(self, symbol=None, freq=0, left=None, right=None):
        """Create a Huffman node.

        :param symbol: Symbol value for leaf nodes; ``None`` for internal nodes.
        :type symbol: Hashable | None
        :param int freq: Frequency associated with this node.
        :param left: Left child node, if any.
        :type left: HuffmanNode|None
        :param right: Right child node, if any.
        :type right: HuffmanNode|None
        :returns: None
        :rtype: None
        :raises ValueError: If a leaf has no symbol, or an internal node
                            does not have exactly two children.
        """
        if (left is None) != (right is None):
            raise ValueError("Internal node needs exactly two children")
        if left is None and (
            symbol is None or (isinstance(symbol, (str, bytes)) and not symbol)
        ):
            raise ValueError("Leaf node needs a non-empty symbol")
        if left is not None and symbol is not None:
            raise ValueError("Internal node cannot hold a symbol")
        object.__setattr__(self, "symbol", symbol)
        object.__setattr__(self, "freq", freq)
        object.__setattr__(self, "left", left)
        object.__setattr__(self, "right", right)

    def __setattr__(self, name, value):
        """Reject attribute assignment.

        :raises AttributeError: Always.
        """
        raise AttributeError("HuffmanNode is immutable")

    def __delattr__(self, name):
        """Reject attribute deletion.

        :raises AttributeError: Always.
        """
        raise AttributeError("HuffmanNode is immutable")

    @property
    def is_leaf(self) -> bool:
        """Whether this node is a leaf.

        :returns: ``True`` if the node has no children.
        :rtype: bool
        """
        return self.left is None

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode({self.symbol!r}, {self.freq})"
        return f"HuffmanNode(freq={self.freq}, left={self.left!r}, right={self.right!r})"

    def leaves(self) -> List["HuffmanNode"]:
        """Return the leaves of this subtree, left to right."""
        result = []
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                result.append(node)
            else:
                stack.append(node.right)
                stack.append(node.left)
        return result


class NodeQueue:
    """Min-priority queue of nodes ordered by frequency.

    Entries are keyed by ``(freq, seq)`` where ``seq`` grows with every
    push, so nodes of equal frequency come out in the order they went in.
    A node pushed after a merge therefore dequeues after every node of the
    same frequency already waiting, and before any pushed later.

    :ivar _heap: Heap of ``(freq, seq, node)`` entries.
    :type _heap: List[Tuple[int, int, HuffmanNode]]
    :ivar _seq: Next sequence number.
    :type _seq: int
    """

    def __init__(self, nodes: Iterable[HuffmanNode] = ()):
        """Create a queue holding ``nodes`` in the given order.

        :param nodes: Initial nodes, pushed one by one.
        :type nodes: Iterable[HuffmanNode]
        :returns: None
        :rtype: None
        """
        self._heap: List[Tuple[int, int, HuffmanNode]] = []
        self._seq = 0
        for node in nodes:
            self.push(node)

    def __len__(self):
        """Return the number of queued nodes."""
        return len(self._heap)

    def push(self, node: HuffmanNode):
        """Queue ``node`` behind every node of equal frequency.

        :param node: Node to queue.
        :type node: HuffmanNode
        :returns: None
        :rtype: None
        """
        heapq.heappush(self._heap, (node.freq, self._seq, node))
        self._seq += 1

    def pop(self) -> HuffmanNode:
        """Remove and return the lowest-frequency, earliest-pushed node.

        :raises IndexError: If the queue is empty.
        """
        return heapq.heappop(self._heap)[2]


def build_tree(frequencies: Dict[Hashable, int]) -> Optional[HuffmanNode]:
    """Build a Huffman tree from a symbol frequency table.

    Leaves are queued in the table's iteration order. The two lowest nodes
    ``a`` then ``b`` are merged into ``HuffmanNode(left=a, right=b)`` until
    one node is left. Ties are broken by :class:`NodeQueue` push order.

    :param frequencies: Mapping from symbol to observed frequency.
    :type frequencies: Dict[Hashable, int]
    :returns: Root of the tree, a single leaf for a one-symbol table, or
              ``None`` for an empty table.
    :rtype: HuffmanNode | None
    """
    if not frequencies:
        return None

    if len(frequencies) == 1:
        symbol, freq = next(iter(frequencies.items()))
        return HuffmanNode(symbol=symbol, freq=freq)

    queue = NodeQueue(
        HuffmanNode(symbol=sym, freq=freq) for sym, freq in frequencies.items()
    )

    while len(queue) > 1:
        left = queue.pop()
        right = queue.pop()
        queue.push(HuffmanNode(freq=left.freq + right.freq, left=left, right=right))

    return queue.pop()


def generate_codes(root: Optional[HuffmanNode]) -> Dict[Hashable, str]:
    """Derive the symbol to bit-string codebook from a Huffman tree.

    Left edges append ``"0"`` and right edges ``"1"``. A tree that is a
    single leaf gets the code ``"0"``, since an empty code cannot be
    decoded.

    :param root: Root of the Huffman tree, or ``None``.
    :type root: HuffmanNode | None
    :returns: Mapping from symbol to its code.
    :rtype: Dict[Hashable, str]
    """
    codes: Dict[Hashable, str] = {}
    if root is None:
        return codes

    if root.is_leaf:
        codes[root.symbol] = "0"
        return codes

    # explicit stack: skewed trees can be deeper than the recursion limit
    stack = [(root, "")]
    while stack:
        node, prefix = stack.pop()
        if node.is_leaf:
            codes[node.symbol] = prefix
        else:
            stack.append((node.right, prefix + "1"))
            stack.append((node.left, prefix + "0"))
    return codes


def is_prefix_free(codes: Dict[Hashable, str]) -> bool:
    """Check that no code in ``codes`` is a prefix of another.

    After sorting, a code that prefixes another sorts directly before
    some code it prefixes, so comparing neighbours is enough.

    :param codes: Codebook to check.
    :type codes: Dict[Hashable, str]
    :returns: ``True`` if the codebook is prefix-free.
    :rtype: bool
    """
    ordered = sorted(codes.values())
    return not any(b.startswith(a) for a, b in zip(ordered, ordered[1:]))
