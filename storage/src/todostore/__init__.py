"""Todo lifecycle, persistence gateways and snapshot transfer."""
