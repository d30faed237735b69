"""In-memory node graph using an arena keyed by handle."""
import itertools
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from ..exceptions import NodeNotFoundError
from ..logging import get_logger
from .models import Node, NODE_TYPE_FILE, NODE_TYPE_FOLDER

# MEGA node types: 0 file, 1 folder, 2 cloud drive, 3 inbox, 4 rubbish bin
NODE_TYPE_DRIVE = 2
FOLDER_TYPES = (1, 2, 3, 4)

Parents = Union[Node, Iterable[Node], None]


class MemoryStorage:
    """
    Node graph held in memory.

    Nodes live in an arena keyed by handle; edges are kept as ordered
    handle lists in both directions, so a node may have several parents.
    Enumeration order is insertion order.

    Example:
        >>> storage = MemoryStorage()
        >>> docs = storage.add_folder("docs")
        >>> storage.add_file("report.pdf", docs)
        >>> [n.name for n in storage.all_child_files(docs)]
        ['report.pdf']
    """

    def __init__(self, root_name: str = "Cloud Drive", root_handle: str = "root"):
        self._nodes: Dict[str, Node] = {}
        self._children: Dict[str, List[str]] = {}
        self._parents: Dict[str, List[str]] = {}
        self._counter = itertools.count(1)
        self._root = self._register(Node(root_handle, root_name, NODE_TYPE_FOLDER))

    # =========================================================================
    # Building
    # =========================================================================

    def _register(self, node: Node) -> Node:
        self._nodes[node.handle] = node
        self._children.setdefault(node.handle, [])
        self._parents.setdefault(node.handle, [])
        return node

    def _connect(self, child: str, parent: str):
        if child not in self._children[parent]:
            self._children[parent].append(child)
            self._parents[child].append(parent)

    def _next_handle(self) -> str:
        while True:
            handle = f"n{next(self._counter)}"
            if handle not in self._nodes:
                return handle

    def _add(self, name: str, node_type: int, parents: Parents, handle: Optional[str]) -> Node:
        if parents is None:
            parents = [self._root]
        elif isinstance(parents, Node):
            parents = [parents]
        else:
            parents = list(parents)

        for parent in parents:
            if not self._require(parent).is_folder:
                raise ValueError(f"Cannot add a child to a file: {parent.name}")

        node = self._register(Node(handle or self._next_handle(), name, node_type))
        for parent in parents:
            self._connect(node.handle, parent.handle)
        return node

    def add_folder(self, name: str, parents: Parents = None, handle: Optional[str] = None) -> Node:
        """
        Create a folder.

        Args:
            name: Folder name
            parents: Parent folder or folders (defaults to the root)
            handle: Explicit handle (generated when omitted)
        """
        return self._add(name, NODE_TYPE_FOLDER, parents, handle)

    def add_file(self, name: str, parents: Parents = None, handle: Optional[str] = None) -> Node:
        """Create a file under one or more parent folders."""
        return self._add(name, NODE_TYPE_FILE, parents, handle)

    def link(self, node: Node, parent: Node):
        """Add an extra parent edge to an existing node."""
        self._require(node)
        if not self._require(parent).is_folder:
            raise ValueError(f"Cannot link under a file: {parent.name}")
        self._connect(node.handle, parent.handle)

    @classmethod
    def from_flat(
        cls,
        records: Iterable[Dict[str, Any]],
        root_handle: Optional[str] = None
    ) -> 'MemoryStorage':
        """
        Build a graph from MEGA-style flat node records.

        Each record carries ``h`` (handle), ``p`` (parent handle or list of
        parent handles), ``t`` (node type) and ``n`` (name). The root is
        ``root_handle`` when given, otherwise the first cloud drive record,
        otherwise the first folder whose parents are all outside the set.

        Raises:
            ValueError: If no root folder can be found
        """
        logger = get_logger('megaglob.storage')
        records = list(records)
        known = {r['h'] for r in records}

        def parent_handles(record) -> List[str]:
            parent = record.get('p')
            if not parent:
                return []
            if isinstance(parent, str):
                return [parent]
            return list(parent)

        def is_folder(record) -> bool:
            return record.get('t', NODE_TYPE_FILE) in FOLDER_TYPES

        root = None
        if root_handle is not None:
            root = next((r for r in records if r['h'] == root_handle), None)
        if root is None:
            root = next((r for r in records if r.get('t') == NODE_TYPE_DRIVE), None)
        if root is None:
            root = next(
                (r for r in records
                 if is_folder(r) and not any(p in known for p in parent_handles(r))),
                None
            )
        if root is None or not is_folder(root):
            raise ValueError("No root folder found in node records")

        storage = cls(root_name=root.get('n', root['h']), root_handle=root['h'])

        for record in records:
            if record is root:
                continue
            node_type = NODE_TYPE_FOLDER if is_folder(record) else NODE_TYPE_FILE
            storage._register(Node(record['h'], record.get('n', record['h']), node_type))

        for record in records:
            if record is root:
                continue
            linked = False
            for parent in parent_handles(record):
                if parent in known and storage._nodes[parent].is_folder:
                    storage._connect(record['h'], parent)
                    linked = True
            if not linked:
                logger.debug(f"Node {record['h']} has no parent in the record set")

        logger.debug(f"Built graph with {len(storage)} nodes under {root['h']}")
        return storage

    # =========================================================================
    # Lookup
    # =========================================================================

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, handle: str) -> bool:
        return handle in self._nodes

    def get(self, handle: str) -> Node:
        """
        Get a node by handle.

        Raises:
            NodeNotFoundError: If the handle is unknown
        """
        try:
            return self._nodes[handle]
        except KeyError:
            raise NodeNotFoundError(handle) from None

    def _require(self, node: Node) -> Node:
        if self._nodes.get(node.handle) != node:
            raise NodeNotFoundError(node.handle)
        return node

    def _children_of(self, folder: Node, want_folders: bool, name: Optional[str]) -> Iterator[Node]:
        self._require(folder)
        for handle in self._children[folder.handle]:
            child = self._nodes[handle]
            if child.is_folder != want_folders:
                continue
            if name is not None and child.name != name:
                continue
            yield child

    # =========================================================================
    # StorageService
    # =========================================================================

    def root_folder(self) -> Node:
        return self._root

    def name(self, node: Node) -> str:
        return self._require(node).name

    def child_folders(self, folder: Node, name: Optional[str] = None) -> Iterator[Node]:
        return iter(list(self._children_of(folder, True, name)))

    def child_files(self, folder: Node, name: Optional[str] = None) -> Iterator[Node]:
        return iter(list(self._children_of(folder, False, name)))

    def all_child_folders(self, folder: Node) -> Iterator[Node]:
        return self.child_folders(folder)

    def all_child_files(self, folder: Node) -> Iterator[Node]:
        return self.child_files(folder)

    def parents(self, node: Node) -> Iterator[Node]:
        self._require(node)
        return iter([self._nodes[h] for h in self._parents[node.handle]])
