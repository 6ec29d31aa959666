"""Internal endpoint modules (one per backend resource)."""
