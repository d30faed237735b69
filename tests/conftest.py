"""Pytest fixtures for megaglob tests."""
import json
from collections import Counter
from types import SimpleNamespace

import pytest
from Crypto.Cipher import AES
from Crypto.Random import get_random_bytes

from megaglob.core.crypto import Base64Encoder, unmerge_key_mac
from megaglob.core.storage import MemoryStorage


class CountingStorage:
    """Wraps a storage service and counts calls per operation."""
    
    def __init__(self, inner):
        self.inner = inner
        self.calls = Counter()
    
    def __getattr__(self, attr):
        target = getattr(self.inner, attr)
        if not callable(target):
            return target
        
        def counted(*args, **kwargs):
            self.calls[attr] += 1
            return target(*args, **kwargs)
        
        return counted


@pytest.fixture
def storage():
    """Empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def tree(storage):
    """
    Sample graph:
    
        /a/b/c/doc.txt
        /a/b1/c/one.txt
        /a/b2/c/two.txt
        /docs/?.log, /docs/a.log, /docs/b.log, /docs/sub/deep.log
        /readme.md
    """
    a = storage.add_folder("a")
    b = storage.add_folder("b", a)
    c = storage.add_folder("c", b)
    doc = storage.add_file("doc.txt", c)
    
    b1 = storage.add_folder("b1", a)
    b1_c = storage.add_folder("c", b1)
    one = storage.add_file("one.txt", b1_c)
    b2 = storage.add_folder("b2", a)
    b2_c = storage.add_folder("c", b2)
    two = storage.add_file("two.txt", b2_c)
    
    docs = storage.add_folder("docs")
    question_log = storage.add_file("?.log", docs)
    a_log = storage.add_file("a.log", docs)
    b_log = storage.add_file("b.log", docs)
    sub = storage.add_folder("sub", docs)
    deep_log = storage.add_file("deep.log", sub)
    
    readme = storage.add_file("readme.md")
    
    return SimpleNamespace(
        storage=storage,
        root=storage.root_folder(),
        a=a, b=b, c=c, doc=doc,
        b1=b1, b1_c=b1_c, one=one,
        b2=b2, b2_c=b2_c, two=two,
        docs=docs, question_log=question_log, a_log=a_log, b_log=b_log,
        sub=sub, deep_log=deep_log,
        readme=readme,
    )


@pytest.fixture
def duplicate_tree(storage):
    """
    Two sibling folders named 'dup' under the root.
    
    The first one holds only f.txt; the second holds f.txt and inner/.
    """
    dup1 = storage.add_folder("dup")
    dup2 = storage.add_folder("dup")
    f1 = storage.add_file("f.txt", dup1)
    f2 = storage.add_file("f.txt", dup2)
    inner = storage.add_folder("inner", dup2)
    return SimpleNamespace(
        storage=storage, root=storage.root_folder(),
        dup1=dup1, dup2=dup2, f1=f1, f2=f2, inner=inner,
    )


@pytest.fixture
def diamond(storage):
    """
    Node 'd' reachable through /a/b/d and /a/c/d, holding e.txt.
    """
    a = storage.add_folder("a")
    b = storage.add_folder("b", a)
    c = storage.add_folder("c", a)
    d = storage.add_folder("d", [b, c])
    e = storage.add_file("e.txt", d)
    return SimpleNamespace(storage=storage, root=storage.root_folder(), a=a, b=b, c=c, d=d, e=e)


@pytest.fixture
def counting_storage():
    """Factory wrapping a storage service in a call counter."""
    return CountingStorage


@pytest.fixture
def share_key():
    """Generates a 16-byte folder share key."""
    return get_random_bytes(16)


@pytest.fixture
def make_record(share_key):
    """Factory for encrypted public folder node records."""
    encoder = Base64Encoder()
    
    def make(handle, parent, node_type, name, node_key=None, owner='SHAREOWN'):
        if node_key is None:
            node_key = get_random_bytes(16 if node_type else 32)
        
        attr = ('MEGA' + json.dumps({'n': name})).encode('utf-8')
        if len(attr) % 16:
            attr += b'\0' * (16 - len(attr) % 16)
        
        attr_cipher = AES.new(unmerge_key_mac(node_key), AES.MODE_CBC, b'\0' * 16)
        key_cipher = AES.new(share_key, AES.MODE_ECB)
        
        return {
            'h': handle,
            'p': parent,
            't': node_type,
            'a': encoder.encode(attr_cipher.encrypt(attr)),
            'k': f"{owner}:{encoder.encode(key_cipher.encrypt(node_key))}",
        }
    
    return make
