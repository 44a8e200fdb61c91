"""
HTTP server for the read-only inventory API.
"""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import CompilerConfig
from ..inventory.store import InventoryStore
from .inventory_api import get_store, router as objects_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title="LwM2M Objects API",
    description="Compiled LwM2M object definitions and resource defaults",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(objects_router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "LwM2M Objects API",
        "version": __version__,
        "endpoints": {
            "objects": "/objects",
            "docs": "/docs",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


def main(config: Optional[CompilerConfig] = None):
    """Main entry point for HTTP server."""
    config = config or CompilerConfig()

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info("=" * 60)
    logger.info("LwM2M Objects - Inventory API")
    logger.info("=" * 60)
    logger.info(f"Host: {config.api_host}")
    logger.info(f"Port: {config.api_port}")
    inventory_path = config.resolved_mirror_path
    app.dependency_overrides[get_store] = lambda: InventoryStore(inventory_path)

    logger.info(f"Inventory: {inventory_path}")
    logger.info("=" * 60)

    uvicorn.run(app, host=config.api_host, port=config.api_port)


if __name__ == "__main__":
    main()
