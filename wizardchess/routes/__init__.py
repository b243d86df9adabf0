"""HTTP routers for the Wizard Chess service."""
