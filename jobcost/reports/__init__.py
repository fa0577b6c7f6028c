"""Report aggregation and PDF rendering."""
