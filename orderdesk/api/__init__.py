"""HTTP API for the order desk."""
