"""data — Shipped TOML tables (tuning constants and character profiles)."""
