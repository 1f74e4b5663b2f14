"""Terminal host for playing unoduel."""
