"""HTTP surface: one route module per entity group."""
