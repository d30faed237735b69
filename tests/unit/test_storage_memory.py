"""Tests for the in-memory storage backend."""
import pytest

from megaglob.core.exceptions import NodeNotFoundError
from megaglob.core.storage import MemoryStorage, Node, StorageService
from megaglob.core.storage.models import NODE_TYPE_FILE, NODE_TYPE_FOLDER


class TestNode:
    """Test suite for the Node model."""

    def test_file_node(self):
        """Test file capability flags."""
        node = Node(handle='h1', name='a.txt')

        assert node.is_file is True
        assert node.is_folder is False

    def test_folder_node(self):
        """Test folder capability flags."""
        node = Node(handle='h2', name='docs', node_type=NODE_TYPE_FOLDER)

        assert node.is_folder is True
        assert node.is_file is False

    def test_to_dict(self):
        """Test record conversion."""
        node = Node(handle='h2', name='docs', node_type=NODE_TYPE_FOLDER)

        assert node.to_dict() == {'h': 'h2', 'n': 'docs', 't': NODE_TYPE_FOLDER}


class TestMemoryStorage:
    """Test suite for MemoryStorage."""

    def test_satisfies_protocol(self, storage):
        """Test storage implements the navigation protocol."""
        assert isinstance(storage, StorageService)

    def test_root(self, storage):
        """Test default root folder."""
        root = storage.root_folder()

        assert root.is_folder
        assert root.handle == 'root'
        assert storage.name(root) == 'Cloud Drive'
        assert list(storage.parents(root)) == []

    def test_add_defaults_to_root(self, storage):
        """Test nodes without parents go under the root."""
        folder = storage.add_folder('docs')

        assert list(storage.parents(folder)) == [storage.root_folder()]

    def test_generated_handles_unique(self, storage):
        """Test generated handles never collide."""
        storage.add_folder('x', handle='n1')
        other = storage.add_folder('y')

        assert other.handle != 'n1'
        assert len(storage) == 3

    def test_children_split_by_type(self, storage):
        """Test folder and file listings are separate."""
        docs = storage.add_folder('docs')
        report = storage.add_file('report.pdf', docs)
        sub = storage.add_folder('sub', docs)

        assert list(storage.all_child_folders(docs)) == [sub]
        assert list(storage.all_child_files(docs)) == [report]

    def test_name_filter(self, storage):
        """Test literal name filtering."""
        docs = storage.add_folder('docs')
        first = storage.add_file('a.txt', docs)
        storage.add_file('b.txt', docs)
        second = storage.add_file('a.txt', docs)

        assert list(storage.child_files(docs, 'a.txt')) == [first, second]
        assert list(storage.child_files(docs, 'a.*')) == []
        assert list(storage.child_folders(docs, 'a.txt')) == []

    def test_multiple_parents(self, storage):
        """Test a node may live in several folders."""
        x = storage.add_folder('x')
        y = storage.add_folder('y')
        shared = storage.add_file('shared', [x, y])

        assert list(storage.parents(shared)) == [x, y]
        assert shared in list(storage.all_child_files(x))
        assert shared in list(storage.all_child_files(y))

    def test_link_adds_parent(self, storage):
        """Test linking an existing node under another folder."""
        x = storage.add_folder('x')
        y = storage.add_folder('y')
        node = storage.add_file('f', x)

        storage.link(node, y)
        storage.link(node, y)

        assert list(storage.parents(node)) == [x, y]

    def test_cannot_add_under_file(self, storage):
        """Test files cannot have children."""
        f = storage.add_file('f')

        with pytest.raises(ValueError):
            storage.add_file('g', f)

        with pytest.raises(ValueError):
            storage.link(storage.add_file('h'), f)

    def test_get(self, storage):
        """Test lookup by handle."""
        folder = storage.add_folder('docs', handle='abc')

        assert storage.get('abc') == folder
        assert 'abc' in storage

    def test_get_unknown_raises(self, storage):
        """Test unknown handle raises NodeNotFoundError."""
        with pytest.raises(NodeNotFoundError) as exc_info:
            storage.get('missing')

        assert exc_info.value.handle == 'missing'

    def test_foreign_node_raises(self, storage):
        """Test listing a node the storage does not know."""
        stranger = Node('zzz', 'stranger', NODE_TYPE_FOLDER)

        with pytest.raises(NodeNotFoundError):
            storage.all_child_folders(stranger)

        with pytest.raises(NodeNotFoundError):
            storage.parents(stranger)

    def test_listings_are_iterators(self, storage):
        """Test enumerations return iterators."""
        folder = storage.add_folder('docs')

        listing = storage.all_child_folders(storage.root_folder())

        assert next(listing) == folder


class TestFromFlat:
    """Test suite for building storage from node records."""

    def test_build_from_records(self):
        """Test a flat MEGA-style listing."""
        records = [
            {'h': 'R', 'p': None, 't': 2, 'n': 'Cloud Drive'},
            {'h': 'A', 'p': 'R', 't': 1, 'n': 'a'},
            {'h': 'F', 'p': 'A', 't': 0, 'n': 'f.txt'},
        ]

        storage = MemoryStorage.from_flat(records)

        assert storage.root_folder().handle == 'R'
        assert [n.handle for n in storage.all_child_folders(storage.root_folder())] == ['A']
        assert storage.get('F').is_file

    def test_children_before_parents(self):
        """Test record order does not matter."""
        records = [
            {'h': 'F', 'p': 'A', 't': 0, 'n': 'f.txt'},
            {'h': 'A', 'p': 'R', 't': 1, 'n': 'a'},
            {'h': 'R', 't': 1, 'n': 'share'},
        ]

        storage = MemoryStorage.from_flat(records)

        assert storage.root_folder().handle == 'R'
        assert list(storage.parents(storage.get('F'))) == [storage.get('A')]

    def test_parent_lists(self):
        """Test records with several parents."""
        records = [
            {'h': 'R', 't': 2, 'n': 'root'},
            {'h': 'X', 'p': 'R', 't': 1, 'n': 'x'},
            {'h': 'Y', 'p': 'R', 't': 1, 'n': 'y'},
            {'h': 'S', 'p': ['X', 'Y'], 't': 0, 'n': 's'},
        ]

        storage = MemoryStorage.from_flat(records)

        assert [p.handle for p in storage.parents(storage.get('S'))] == ['X', 'Y']

    def test_explicit_root_handle(self):
        """Test root chosen by handle, its outside parent ignored."""
        records = [
            {'h': 'S', 'p': 'outside', 't': 1, 'n': 'shared'},
            {'h': 'F', 'p': 'S', 't': 0, 'n': 'f'},
        ]

        storage = MemoryStorage.from_flat(records, root_handle='S')

        assert storage.root_folder().name == 'shared'
        assert list(storage.parents(storage.root_folder())) == []

    def test_missing_name_uses_handle(self):
        """Test nodes without a name are named by handle."""
        storage = MemoryStorage.from_flat([{'h': 'R', 't': 1}, {'h': 'F', 'p': 'R', 't': NODE_TYPE_FILE}])

        assert storage.name(storage.get('F')) == 'F'

    def test_no_root_raises(self):
        """Test records without a folder root."""
        with pytest.raises(ValueError):
            MemoryStorage.from_flat([{'h': 'F', 't': 0, 'n': 'f'}])

    def test_empty_records_raise(self):
        """Test empty listing."""
        with pytest.raises(ValueError):
            MemoryStorage.from_flat([])
