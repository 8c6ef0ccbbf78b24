"""HTTP gateway: contracts, routers and dependency wiring."""
