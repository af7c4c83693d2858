"""Pure record, plan and oracle logic (no I/O)."""
