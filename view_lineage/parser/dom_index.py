"""
Indexed queries over a parsed node table.

This module defines the DomIndex class, which builds parent -> children and
name -> nodes indexes once per parse so that pattern matching over the tree
costs ordinary dictionary lookups instead of repeated scans.
"""

from collections import defaultdict
from typing import Dict, Iterator, List, Optional, Sequence

from view_lineage.models.dom import DomNode, NodeType


class DomIndex:
    """Read-only index over a node table.

    Attributes:
        nodes: The node table, index == node_id.

    Example:
        >>> index = DomIndex(parse_xml('<a x="1"><b/></a>'))
        >>> [n.node_name for n in index.children(1)]
        ['x', 'b']
        >>> index.attribute(1, "x")
        '1'
    """

    def __init__(self, nodes: Sequence[DomNode]) -> None:
        self.nodes = list(nodes)
        self._children: Dict[int, List[DomNode]] = defaultdict(list)
        self._by_name: Dict[str, List[DomNode]] = defaultdict(list)
        for node in self.nodes:
            if node.parent_node_id is not None:
                self._children[node.parent_node_id].append(node)
            self._by_name[node.node_name].append(node)

    @property
    def root(self) -> DomNode:
        return self.nodes[0]

    def node(self, node_id: int) -> DomNode:
        return self.nodes[node_id]

    def parent(self, node: DomNode) -> Optional[DomNode]:
        if node.parent_node_id is None:
            return None
        return self.nodes[node.parent_node_id]

    def children(
        self,
        node_id: int,
        node_type: Optional[NodeType] = None,
        name: Optional[str] = None,
    ) -> List[DomNode]:
        """Return the children of a node, optionally filtered.

        Args:
            node_id: Id of the parent node.
            node_type: Only return children of this type.
            name: Only return children with this node name.

        Returns:
            Matching children in document order (attributes first).
        """
        return [
            child
            for child in self._children.get(node_id, ())
            if (node_type is None or child.node_type == node_type)
            and (name is None or child.node_name == name)
        ]

    def child_elements(self, node_id: int, name: Optional[str] = None) -> List[DomNode]:
        return self.children(node_id, NodeType.ELEMENT, name)

    def attributes(self, node_id: int) -> Dict[str, str]:
        """Return the attributes of an element as a name -> value mapping.

        If an attribute name repeats, the first occurrence wins.
        """
        result: Dict[str, str] = {}
        for child in self._children.get(node_id, ()):
            if child.node_type != NodeType.ATTRIBUTE:
                # attributes always precede element content
                break
            result.setdefault(child.node_name, child.node_value or "")
        return result

    def attribute(self, node_id: int, name: str) -> Optional[str]:
        return self.attributes(node_id).get(name)

    def nodes_named(self, name: str, node_type: Optional[NodeType] = None) -> List[DomNode]:
        return [
            node
            for node in self._by_name.get(name, ())
            if node_type is None or node.node_type == node_type
        ]

    def elements(self, name: str) -> List[DomNode]:
        """Return all elements with the given tag name, in document order."""
        return self.nodes_named(name, NodeType.ELEMENT)

    def attribute_nodes(self, name: str) -> List[DomNode]:
        """Return all attribute nodes with the given name, in document order."""
        return self.nodes_named(name, NodeType.ATTRIBUTE)

    def depth(self, node: DomNode) -> int:
        depth = 0
        while node.parent_node_id is not None:
            node = self.nodes[node.parent_node_id]
            depth += 1
        return depth

    def iter_descendants(self, node_id: int = 0) -> Iterator[DomNode]:
        """Yield all descendants of a node in pre-order."""
        stack = list(reversed(self._children.get(node_id, ())))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(self._children.get(node.node_id, ())))

    def __len__(self) -> int:
        return len(self.nodes)
