"""Pure business rules: costing, job numbering, custom fields and date presets."""
