"""Run the MilaVault API under uvicorn (reloads on code changes)."""
import logging
import uvicorn

from milavault.config import API_HOST, API_PORT

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    uvicorn.run(
        "milavault.api.app:app",
        host=API_HOST,
        port=API_PORT,
        reload=True,
    )
