"""HTTP routers and the global error responder."""
