"""
In-memory stand-in for the slice of the Firestore client API the code uses:
collection/document references, limit/start_after/stream queries,
DocumentReference.collections(), write batches and add().

Documents are keyed by their full slash path. As in Firestore, a document's
subcollections exist independently of the document itself, so deleting a
parent without its children leaves the children in place.
"""

import uuid

FIRESTORE_BATCH_LIMIT = 500


class FakeFirestore:
    def __init__(self):
        self.docs = {}
        self.commits = []  # one list of deleted paths per committed batch
        self.queries = []  # (collection_path, limit, cursor_id) per stream()
        self.fail_on_commit = None  # optional callable(batch_paths) that may raise
        self.fail_on_add = None

    # --- client API ---
    def collection(self, path):
        return FakeCollectionRef(self, path.strip('/'))

    def batch(self):
        return FakeWriteBatch(self)

    # --- test helpers ---
    def seed(self, path, data=None):
        self.docs[path] = dict(data or {})

    def seed_many(self, collection_path, count, prefix="doc"):
        for i in range(count):
            self.seed(f"{collection_path}/{prefix}{i:05d}", {"n": i})

    def exists(self, path):
        return path in self.docs

    def docs_in(self, collection_path):
        return sorted(_direct_children(self.docs, collection_path))

    def commit_index(self, path):
        for i, committed in enumerate(self.commits):
            if path in committed:
                return i
        return None


def _direct_children(docs, collection_path):
    prefix = collection_path + "/"
    return [
        path[len(prefix):] for path in docs
        if path.startswith(prefix) and "/" not in path[len(prefix):]
    ]


class FakeCollectionRef:
    def __init__(self, client, path):
        self._client = client
        self._path = path

    @property
    def id(self):
        return self._path.rsplit("/", 1)[-1]

    @property
    def parent(self):
        if "/" not in self._path:
            return None
        return FakeDocumentRef(self._client, self._path.rsplit("/", 1)[0])

    def document(self, document_id=None):
        return FakeDocumentRef(self._client, f"{self._path}/{document_id or uuid.uuid4().hex}")

    def limit(self, count):
        return FakeQuery(self, count)

    def stream(self):
        return FakeQuery(self, None).stream()

    def add(self, data):
        if self._client.fail_on_add:
            self._client.fail_on_add(data)
        ref = self.document()
        ref.set(data)
        return None, ref


class FakeDocumentRef:
    def __init__(self, client, path):
        self._client = client
        self.path = path

    @property
    def id(self):
        return self.path.rsplit("/", 1)[-1]

    @property
    def parent(self):
        return FakeCollectionRef(self._client, self.path.rsplit("/", 1)[0])

    def collection(self, name):
        return FakeCollectionRef(self._client, f"{self.path}/{name}")

    def collections(self):
        prefix = self.path + "/"
        names = {
            path[len(prefix):].split("/", 1)[0]
            for path in self._client.docs if path.startswith(prefix)
        }
        return [self.collection(name) for name in sorted(names)]

    def get(self):
        return FakeDocumentSnapshot(self, self._client.docs.get(self.path))

    def set(self, data):
        self._client.docs[self.path] = dict(data)

    def delete(self):
        self._client.docs.pop(self.path, None)

    def __eq__(self, other):
        return isinstance(other, FakeDocumentRef) and other.path == self.path

    def __hash__(self):
        return hash(self.path)

    def __repr__(self):
        return f"FakeDocumentRef({self.path!r})"


class FakeDocumentSnapshot:
    def __init__(self, reference, data):
        self.reference = reference
        self._data = data

    @property
    def id(self):
        return self.reference.id

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeQuery:
    def __init__(self, collection_ref, count, cursor_id=None):
        self._collection = collection_ref
        self._count = count
        self._cursor_id = cursor_id

    def limit(self, count):
        return FakeQuery(self._collection, count, self._cursor_id)

    def start_after(self, snapshot):
        return FakeQuery(self._collection, self._count, snapshot.id)

    def stream(self):
        client = self._collection._client
        path = self._collection._path
        client.queries.append((path, self._count, self._cursor_id))

        ids = sorted(_direct_children(client.docs, path))
        if self._cursor_id is not None:
            ids = [doc_id for doc_id in ids if doc_id > self._cursor_id]
        if self._count is not None:
            ids = ids[:self._count]

        for doc_id in ids:
            ref = FakeDocumentRef(client, f"{path}/{doc_id}")
            yield FakeDocumentSnapshot(ref, client.docs[ref.path])


class FakeWriteBatch:
    def __init__(self, client):
        self._client = client
        self._deletes = []

    def delete(self, reference):
        self._deletes.append(reference.path)

    def commit(self):
        if len(self._deletes) > FIRESTORE_BATCH_LIMIT:
            raise ValueError(f"maximum {FIRESTORE_BATCH_LIMIT} writes allowed per request")
        if self._client.fail_on_commit:
            self._client.fail_on_commit(list(self._deletes))
        for path in self._deletes:
            self._client.docs.pop(path, None)
        self._client.commits.append(list(self._deletes))
        return []
