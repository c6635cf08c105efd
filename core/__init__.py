"""
Core - shared building blocks for LabourHub apps.

- db.models: abstract timestamped base model
- management.commands.seed_marketplace: development data seeding
"""
