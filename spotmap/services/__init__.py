"""Business logic services for spotmap."""

# Service modules are imported individually where needed
# to avoid circular imports

__all__ = [
    "container",
    "contracts",
    "review",
    "saga",
    "spot_lifecycle",
    "spot_query",
    "store",
    "tag",
    "user",
    "validation",
]
