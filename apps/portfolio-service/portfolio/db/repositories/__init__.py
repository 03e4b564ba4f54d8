"""
Per-entity repository modules for database access.

Every public function is a coroutine that takes the `StoreClient` as its
first argument, runs its work through `StoreClient.run` (retry wrapper
around one transaction) and returns a `Result`: `Ok`, `NotFound` or `Err`.
"""
