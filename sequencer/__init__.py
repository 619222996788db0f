"""In-memory registry of rollapp sequencers: records, keyed store, queries, message handling and genesis."""

__version__ = "0.1.0"