"""RanchOps zone boundary editor sources."""
