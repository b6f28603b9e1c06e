"""Workers of the release synchronization pipeline."""
