"""Breadcrumb Trail: authoring backend and seeded journey generator for a
"follow the brother's trail" narrative mechanic."""
