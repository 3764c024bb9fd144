"""Core logic of ostatus: roles, solving, manifests and status files."""
