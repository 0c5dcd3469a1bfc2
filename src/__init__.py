"""What-if household finance dashboard."""
