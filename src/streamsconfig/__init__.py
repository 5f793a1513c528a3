"""
streamsconfig: layered configuration resolution for stream-processing clients.

Turns one flat property set into validated, independent configuration maps
for every internal client a stream-processing application runs: main,
restore, and global consumers, the producer, and the admin client.
"""

__version__ = "0.1.0"
