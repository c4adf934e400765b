"""linksync - attach live stream links from a sports feed to scheduled events."""
