"""BucketBase - storage core for an object-storage backed admin console.

Sites hold collections (schemas) and their records. The console reads and
writes them through an embedded or a remote storage backend; the admin API
persists them to an object store.
"""

__version__ = "0.1.0"

from bucketbase.infrastructure.api.app import app

__all__ = ["app", "__version__"]
