"""
repositories/ - Data Access Layer
==================================
A single generic repository runs CRUD statements against any table that
has a TableDescriptor. It receives raw rows from the store and returns
GenericRecord objects.
"""
