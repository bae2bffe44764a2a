"""HTTP service and multiplayer rooms for Tarneeb."""
