"""
The ROUTING layer orders room boundaries and builds wire paths along them.
Every function is pure: it reads the snapshot it is given and returns a new value.
"""
