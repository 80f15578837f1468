"""
query/ - Statement Construction Layer
=====================================
Pure functions that validate identifiers, translate filter maps, normalize
sort/page requests and assemble parameterized statements.
Nothing in this layer touches a connection.
"""
