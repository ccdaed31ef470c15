"""HTTP API: FastAPI app, shared state and routers."""
