"""HTTP API for payout run workings and dashboard summaries."""
