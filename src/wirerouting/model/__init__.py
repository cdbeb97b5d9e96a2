"""
The MODEL layer contains pure data structures: points, boundary curves,
boundary loops and room snapshots.
It has NO knowledge of the CAD host or of any UI.
"""
