"""Client-side synchronization layer for the knowledge graph dashboard."""
