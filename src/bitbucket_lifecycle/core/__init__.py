"""Action contribution and eligibility engine."""
